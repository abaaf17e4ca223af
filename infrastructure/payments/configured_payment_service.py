# infrastructure/payments/configured_payment_service.py
from __future__ import annotations

from typing import List

from application.ports.payment_service import PaymentMethodProviderPort, PaymentServicePort
from domain.cart import ShoppingCart
from domain.payment import PostProcessPaymentRequest
from domain.settings import PaymentSettings


class ConfiguredPaymentService(PaymentServicePort):
    """Offline payment: only methods with a configured redirect url send the customer elsewhere."""

    def __init__(self, settings: PaymentSettings):
        self._settings = settings

    def post_process_payment(self, request: PostProcessPaymentRequest) -> None:
        template = self._settings.redirect_urls.get(request.order.payment_method_system_name or "")
        if template:
            request.redirect_url = template.replace("{order_guid}", request.order.order_guid)


class ConfiguredPaymentMethodProvider(PaymentMethodProviderPort):
    def __init__(self, settings: PaymentSettings):
        self._settings = settings

    def get_payment_methods(self, cart: ShoppingCart) -> List[str]:
        return list(self._settings.methods)
