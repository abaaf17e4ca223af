# application/handlers/shipping_method_handler.py
from __future__ import annotations

from application.handlers.base import CheckoutHandler
from application.outcome import CheckoutHandlerResult
from application.ports.shipping import ShippingMethodProviderPort
from domain.checkout import CheckoutContext, CheckoutWorkflowError
from domain.settings import ShippingSettings


class ShippingMethodHandler(CheckoutHandler):
    order = 30
    action_name = "ShippingMethod"

    def __init__(self, provider: ShippingMethodProviderPort, settings: ShippingSettings):
        self._provider = provider
        self._settings = settings

    def process(self, context: CheckoutContext) -> CheckoutHandlerResult:
        cart = context.cart
        customer = cart.customer

        if not cart.requires_shipping:
            customer.selected_shipping_option = None
            customer.offered_shipping_options = []
            return CheckoutHandlerResult(success=True, skip_page=True)

        options = self._provider.get_shipping_options(cart)
        customer.offered_shipping_options = list(options)

        if not options:
            return CheckoutHandlerResult(
                success=False,
                errors=[CheckoutWorkflowError("", "No shipping options are available for this order.")],
            )

        if len(options) == 1 and self._settings.skip_if_single_option:
            customer.selected_shipping_option = options[0].system_name
            return CheckoutHandlerResult(success=True, skip_page=True)

        offered = {o.system_name for o in options}
        return CheckoutHandlerResult(success=customer.selected_shipping_option in offered)
