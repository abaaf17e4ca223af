# tests/domain/test_checkout_context.py
from domain.cart import CartItem, Customer, ShippingOption, ShoppingCart
from domain.checkout import (
    CHECKOUT_STATE_KEY,
    CheckoutContext,
    CheckoutRequest,
    CheckoutState,
    CheckoutWorkflowError,
    CheckoutWorkflowResult,
)
from domain.routes import RouteIdentity


def _cart(*items):
    return ShoppingCart(customer=Customer(id=1), store_id=1, items=list(items))


class TestShoppingCart:
    def test_empty_cart(self):
        cart = _cart()
        assert cart.has_items is False
        assert cart.requires_shipping is False

    def test_requires_shipping_when_any_item_ships(self):
        cart = _cart(
            CartItem(sku="EBOOK", name="E-book", is_ship_enabled=False),
            CartItem(sku="MUG", name="Mug"),
        )
        assert cart.has_items is True
        assert cart.requires_shipping is True

    def test_reset_checkout_data_keeps_addresses(self):
        customer = Customer(
            id=1,
            selected_shipping_option="Shipping.Standard",
            offered_shipping_options=[ShippingOption("Shipping.Standard", "Standard")],
            selected_payment_method="Payments.Invoice",
        )
        customer.reset_checkout_data()
        assert customer.selected_shipping_option is None
        assert customer.offered_shipping_options == []
        assert customer.selected_payment_method is None


class TestCheckoutContext:
    def test_route_without_request(self):
        ctx = CheckoutContext(cart=_cart())
        assert ctx.route is None
        assert ctx.is_current_route(None, "Index") is False

    def test_is_current_route(self):
        ctx = CheckoutContext(cart=_cart(), request=CheckoutRequest(route=RouteIdentity("Checkout", "Index")))
        assert ctx.is_current_route("Checkout", "index") is True
        assert ctx.is_current_route(None, "Index") is True
        assert ctx.is_current_route("Checkout", "Confirm") is False

    def test_checkout_state_is_created_once_per_session(self):
        session = {}
        ctx = CheckoutContext(
            cart=_cart(),
            request=CheckoutRequest(route=RouteIdentity("Checkout", "Index"), session=session),
        )

        state = ctx.get_checkout_state()
        state.is_payment_selection_skipped = True

        assert session[CHECKOUT_STATE_KEY] is state
        assert ctx.get_checkout_state().is_payment_selection_skipped is True

    def test_abandon_checkout_state(self):
        session = {CHECKOUT_STATE_KEY: CheckoutState(), "other": 1}
        ctx = CheckoutContext(
            cart=_cart(),
            request=CheckoutRequest(route=RouteIdentity("Checkout", "Index"), session=session),
        )

        ctx.abandon_checkout_state()
        ctx.abandon_checkout_state()

        assert session == {"other": 1}


def test_workflow_result_has_errors():
    assert CheckoutWorkflowResult().has_errors is False
    assert CheckoutWorkflowResult(errors=[CheckoutWorkflowError("", "x")]).has_errors is True
