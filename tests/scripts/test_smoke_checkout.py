from __future__ import annotations

import sys

import pytest

from scripts import smoke_checkout


def test_local_walk_reaches_completed_page(monkeypatch, capsys) -> None:
    # Arrange
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "smoke_checkout.py",
            "local",
            "--shipping-option",
            "Shipping.Standard",
            "--payment-method",
            "Payments.Invoice",
        ],
    )

    # Act
    with pytest.raises(SystemExit) as excinfo:
        smoke_checkout.main()

    # Assert
    captured = capsys.readouterr()
    assert "=== Complete ===" in captured.out
    assert "action:Checkout/Completed" in captured.out
    assert excinfo.value.code == 0


def test_local_walk_without_selection_stops_before_confirm(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["smoke_checkout.py", "local"])

    with pytest.raises(SystemExit) as excinfo:
        smoke_checkout.main()

    captured = capsys.readouterr()
    assert "Checkout did not reach the confirm page" in captured.out
    assert excinfo.value.code == 1


def test_api_walk_posts_each_operation(monkeypatch, capsys) -> None:
    # Arrange
    calls = []
    pages = {
        "Index": "BillingAddress",
        "BillingAddress": "Confirm",
        "Confirm": "Completed",
    }

    class DummyResponse:
        def __init__(self, data):
            self._data = data

        def raise_for_status(self):
            return None

        def json(self):
            return self._data

    def fake_put(url, json, timeout):
        calls.append(("PUT", url))
        return DummyResponse({"customer_id": 5, "items": 1})

    def fake_post(url, json, timeout):
        calls.append(("POST", url))
        action = pages[json["route"]["action"]]
        return DummyResponse({
            "navigation": {"kind": "action", "controller": "Checkout", "action": action},
            "errors": [],
        })

    monkeypatch.setattr(smoke_checkout.requests, "put", fake_put)
    monkeypatch.setattr(smoke_checkout.requests, "post", fake_post)
    monkeypatch.setattr(
        sys,
        "argv",
        ["smoke_checkout.py", "api", "--api-base-url", "http://localhost:8000/", "--customer-id", "5"],
    )

    # Act
    with pytest.raises(SystemExit) as excinfo:
        smoke_checkout.main()

    # Assert
    assert excinfo.value.code == 0
    assert calls == [
        ("PUT", "http://localhost:8000/carts/5"),
        ("POST", "http://localhost:8000/checkout/start"),
        ("POST", "http://localhost:8000/checkout/advance"),
        ("POST", "http://localhost:8000/checkout/complete"),
    ]


def test_missing_command_prints_help(monkeypatch) -> None:
    monkeypatch.setattr(sys, "argv", ["smoke_checkout.py"])

    with pytest.raises(SystemExit) as excinfo:
        smoke_checkout.main()

    assert excinfo.value.code == 1
