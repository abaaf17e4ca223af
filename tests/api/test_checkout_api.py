from __future__ import annotations

import pytest
from fastapi import HTTPException

from api import main
from api.main import (
    AddressModel,
    CartItemModel,
    CartRequest,
    CheckoutOperationRequest,
    CheckoutSelections,
    RouteModel,
)
from application.exceptions import CheckoutConfigurationError
from infrastructure.cart.in_memory_cart_repository import InMemoryCartRepository
from infrastructure.orders.in_memory_order_processing import InMemoryOrderProcessingService
from infrastructure.session.in_memory_session_repository import InMemorySessionRepository
from checkout_fakes import FakeLogger

ADDRESS = AddressModel(
    first_name="Jane",
    last_name="Doe",
    street="1 Main Street",
    city="Springfield",
    zip_code="12345",
    country_code="US",
)


@pytest.fixture
def log_events(monkeypatch):
    events = []
    monkeypatch.setattr(main, "CART_REPOSITORY", InMemoryCartRepository())
    monkeypatch.setattr(main, "SESSION_REPOSITORY", InMemorySessionRepository())
    monkeypatch.setattr(main, "ORDER_PROCESSING", InMemoryOrderProcessingService(main.CONFIG.order))
    monkeypatch.setattr(main, "LoguruLogger", lambda: FakeLogger(events=events))
    return events


def _put_cart(customer_id: int, items, with_addresses: bool = True) -> None:
    main.put_cart(
        customer_id,
        CartRequest(
            is_registered=True,
            billing_address=ADDRESS if with_addresses else None,
            shipping_address=ADDRESS if with_addresses else None,
            items=[CartItemModel(**i) for i in items],
        ),
    )


def _run(operation: str, customer_id: int, action: str, session_id: str = "s1", **selections):
    return main.run_checkout_operation(
        operation,
        CheckoutOperationRequest(
            customer_id=customer_id,
            session_id=session_id,
            route=RouteModel(action=action),
            selections=CheckoutSelections(**selections) if selections else None,
        ),
    )


def _action(response) -> str:
    assert response.navigation is not None
    assert response.navigation.kind == "action"
    return response.navigation.action


def test_read_root() -> None:
    assert main.read_root() == {"status": "ok", "service": "checkout"}


def test_stepwise_checkout_places_order(log_events) -> None:
    # Arrange
    _put_cart(101, [{"sku": "SKU-100", "name": "Mug", "quantity": 2}])

    # Act / Assert
    assert _action(_run("start", 101, "Index")) == "BillingAddress"
    assert _action(_run("advance", 101, "BillingAddress")) == "ShippingAddress"
    assert _action(_run("advance", 101, "ShippingAddress")) == "ShippingMethod"
    assert _action(_run("advance", 101, "ShippingMethod", shipping_option="Shipping.Standard")) == "PaymentMethod"
    assert _action(_run("advance", 101, "PaymentMethod", payment_method="Payments.Invoice")) == "Confirm"

    response = _run("complete", 101, "Confirm")

    assert _action(response) == "Completed"
    assert response.errors == []
    orders = main.list_customer_orders(101)
    assert len(orders) == 1
    assert orders[0].payment_method_system_name == "Payments.Invoice"
    assert any(e["type"] == "checkout.order.placed" and e["customer_id"] == 101 for e in log_events)
    assert all(e.get("request_id") for e in log_events)


def test_advance_without_selection_stays_on_page(log_events) -> None:
    _put_cart(102, [{"sku": "SKU-100", "name": "Mug"}])

    response = _run("advance", 102, "ShippingMethod")

    assert _action(response) == "ShippingMethod"


def test_paypal_order_redirects_to_payment_provider(log_events) -> None:
    _put_cart(103, [{"sku": "SKU-100", "name": "Mug"}])
    _run("advance", 103, "PaymentMethod", payment_method="Payments.PayPal")

    response = _run("complete", 103, "Confirm")

    assert response.navigation.kind == "url"
    order_guid = main.list_customer_orders(103)[0].order_guid
    assert response.navigation.url == f"https://payments.example.test/paypal/{order_guid}"


def test_second_order_inside_interval_is_blocked(log_events) -> None:
    _put_cart(104, [{"sku": "SKU-100", "name": "Mug"}])
    _run("advance", 104, "PaymentMethod", payment_method="Payments.Invoice")
    _run("complete", 104, "Confirm")

    response = _run("complete", 104, "Confirm", payment_method="Payments.Invoice")

    assert _action(response) == "Confirm"
    assert [n.type for n in response.notifications] == ["warning"]
    assert len(main.list_customer_orders(104)) == 1


def test_out_of_stock_cart_returns_to_cart(log_events) -> None:
    _put_cart(105, [{"sku": "SKU-300", "name": "Teapot"}])

    response = _run("start", 105, "Index")

    assert response.navigation.controller == "ShoppingCart"
    assert [n.message for n in response.notifications] == ["Only 0 item(s) of 'Teapot' are in stock."]


def test_empty_cart_returns_to_cart(log_events) -> None:
    _put_cart(106, [])

    response = _run("advance", 106, "BillingAddress")

    assert (response.navigation.controller, response.navigation.action) == ("ShoppingCart", "Cart")


def test_unknown_operation_is_404(log_events) -> None:
    with pytest.raises(HTTPException) as exc_info:
        _run("abandon", 101, "Index")
    assert exc_info.value.status_code == 404


def test_unknown_cart_is_404(log_events) -> None:
    with pytest.raises(HTTPException) as exc_info:
        _run("start", 999, "Index")
    assert exc_info.value.status_code == 404


def test_blank_session_id_is_400(log_events) -> None:
    _put_cart(107, [{"sku": "SKU-100", "name": "Mug"}])

    with pytest.raises(HTTPException) as exc_info:
        _run("start", 107, "Index", session_id=" ")
    assert exc_info.value.status_code == 400


def test_invalid_customer_id_is_400(log_events) -> None:
    with pytest.raises(HTTPException) as exc_info:
        main.put_cart(0, CartRequest())
    assert exc_info.value.status_code == 400


def test_configuration_error_is_500_and_logged(log_events, monkeypatch) -> None:
    def broken(workflow, context):
        raise CheckoutConfigurationError("No checkout handlers found.")

    monkeypatch.setitem(main.OPERATIONS, "start", broken)
    _put_cart(108, [{"sku": "SKU-100", "name": "Mug"}])

    with pytest.raises(HTTPException) as exc_info:
        _run("start", 108, "Index")

    assert exc_info.value.status_code == 500
    errors = [e for e in log_events if e["type"] == "checkout.configuration_error"]
    assert errors[0]["operation"] == "start"
