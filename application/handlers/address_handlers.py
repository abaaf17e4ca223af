# application/handlers/address_handlers.py
from __future__ import annotations

from application.handlers.base import CheckoutHandler
from application.outcome import CheckoutHandlerResult
from domain.checkout import CheckoutContext


class BillingAddressHandler(CheckoutHandler):
    order = 10
    action_name = "BillingAddress"

    def process(self, context: CheckoutContext) -> CheckoutHandlerResult:
        customer = context.cart.customer
        return CheckoutHandlerResult(success=customer.billing_address is not None)


class ShippingAddressHandler(CheckoutHandler):
    order = 20
    action_name = "ShippingAddress"

    def process(self, context: CheckoutContext) -> CheckoutHandlerResult:
        cart = context.cart
        if not cart.requires_shipping:
            # nothing to ship, the page has nothing to ask for
            cart.customer.shipping_address = None
            return CheckoutHandlerResult(success=True, skip_page=True)

        return CheckoutHandlerResult(success=cart.customer.shipping_address is not None)
