# application/handlers/payment_method_handler.py
from __future__ import annotations

from application.handlers.base import CheckoutHandler
from application.outcome import CheckoutHandlerResult
from application.ports.payment_service import PaymentMethodProviderPort
from domain.checkout import CheckoutContext, CheckoutWorkflowError
from domain.settings import PaymentSettings


class PaymentMethodHandler(CheckoutHandler):
    order = 40
    action_name = "PaymentMethod"

    def __init__(self, provider: PaymentMethodProviderPort, settings: PaymentSettings):
        self._provider = provider
        self._settings = settings

    def process(self, context: CheckoutContext) -> CheckoutHandlerResult:
        customer = context.cart.customer
        state = context.get_checkout_state()

        methods = self._provider.get_payment_methods(context.cart)
        if not methods:
            return CheckoutHandlerResult(
                success=False,
                errors=[CheckoutWorkflowError("", "No payment methods are available for this order.")],
            )

        if len(methods) == 1 and self._settings.skip_if_single_method:
            customer.selected_payment_method = methods[0]
            state.is_payment_selection_skipped = True
            return CheckoutHandlerResult(success=True, skip_page=True)

        state.is_payment_selection_skipped = False
        return CheckoutHandlerResult(success=customer.selected_payment_method in methods)
