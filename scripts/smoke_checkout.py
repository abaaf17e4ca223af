#!/usr/bin/env python3
"""
Checkout walk-through script

Usage:
  python scripts/smoke_checkout.py local [--quick] [--payment-method <name>] [--shipping-option <name>]
  python scripts/smoke_checkout.py api --api-base-url <url> [--customer-id <id>] [--payment-method <name>]

Examples:
  python scripts/smoke_checkout.py local --quick
  python scripts/smoke_checkout.py api --api-base-url http://localhost:8000 --payment-method Payments.Invoice
"""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional
from uuid import uuid4

import requests
from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

load_dotenv()

from infrastructure.logging.log_setup import setup_console_logging
setup_console_logging(level="INFO")

from application.executor.checkout_workflow import CheckoutWorkflow
from application.executor.handler_registry import CheckoutHandlerRegistry
from application.handlers.address_handlers import BillingAddressHandler, ShippingAddressHandler
from application.handlers.payment_method_handler import PaymentMethodHandler
from application.handlers.shipping_method_handler import ShippingMethodHandler
from application.services.checkout_deps import CheckoutDeps
from domain.cart import Address, CartItem, Customer, ShoppingCart
from domain.checkout import CheckoutContext, CheckoutRequest, CheckoutWorkflowResult
from domain.routes import CHECKOUT_CONTROLLER, CONFIRM_ACTION, ENTRY_ACTION, RouteIdentity
from infrastructure.cart.catalog_cart_validator import CatalogCartValidator
from infrastructure.cart.in_memory_cart_repository import InMemoryCartRepository
from infrastructure.config.settings_loader import CheckoutSettingsLoader
from infrastructure.events.in_memory_event_publisher import InMemoryEventPublisher
from infrastructure.logging.loguru_logger import LoguruLogger
from infrastructure.notifications.in_memory_notifier import InMemoryNotifier
from infrastructure.orders.in_memory_order_processing import InMemoryOrderProcessingService
from infrastructure.payments.configured_payment_service import (
    ConfiguredPaymentMethodProvider,
    ConfiguredPaymentService,
)
from infrastructure.shipping.configured_shipping_provider import ConfiguredShippingMethodProvider


DEFAULT_API_TIMEOUT_SEC = 30
MAX_PAGES = 10

SAMPLE_ADDRESS = {
    "first_name": "Jane",
    "last_name": "Doe",
    "street": "1 Main Street",
    "city": "Springfield",
    "zip_code": "12345",
    "country_code": "US",
    "email": "jane@example.test",
}
SAMPLE_ITEMS = [{"sku": "SKU-100", "name": "Coffee mug", "quantity": 2}]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Checkout walk-through helper")
    subparsers = parser.add_subparsers(dest="command")

    local_parser = subparsers.add_parser("local", help="Walk the checkout in-process")
    local_parser.add_argument("--quick", action="store_true", help="Enable quick checkout")
    local_parser.add_argument("--shipping-option", type=str)
    local_parser.add_argument("--payment-method", type=str)

    api_parser = subparsers.add_parser("api", help="Walk the checkout against a running API")
    api_parser.add_argument("--api-base-url", type=str, required=True)
    api_parser.add_argument("--customer-id", type=int, default=1)
    api_parser.add_argument("--shipping-option", type=str)
    api_parser.add_argument("--payment-method", type=str)

    return parser


def _describe(result: CheckoutWorkflowResult) -> str:
    nav = result.navigation
    if nav is None:
        target = "-"
    elif nav.url:
        target = nav.url
    else:
        target = f"{nav.kind.value}:{nav.controller or ''}/{nav.action or ''}"
    errors = "; ".join(e.message for e in result.errors)
    return f"{target}" + (f" errors=[{errors}]" if errors else "")


def _run_local(args: argparse.Namespace) -> int:
    config = CheckoutSettingsLoader().load()
    if args.quick:
        config = replace(config, shopping_cart=replace(config.shopping_cart, quick_checkout_enabled=True))

    registry = CheckoutHandlerRegistry([
        BillingAddressHandler(),
        ShippingAddressHandler(),
        ShippingMethodHandler(ConfiguredShippingMethodProvider(config.shipping), config.shipping),
        PaymentMethodHandler(ConfiguredPaymentMethodProvider(config.payment), config.payment),
    ])

    notifier = InMemoryNotifier()
    deps = CheckoutDeps(
        cart_validator=CatalogCartValidator(config.catalog),
        event_publisher=InMemoryEventPublisher(),
        order_processing=InMemoryOrderProcessingService(config.order),
        payment_service=ConfiguredPaymentService(config.payment),
        notifier=notifier,
        unit_of_work=InMemoryCartRepository(),
        logger=LoguruLogger(),
    )
    workflow = CheckoutWorkflow(registry, deps, config.order, config.shopping_cart)

    customer = Customer(
        id=1,
        is_registered=True,
        billing_address=Address(**SAMPLE_ADDRESS),
        shipping_address=Address(**SAMPLE_ADDRESS),
    )
    cart = ShoppingCart(customer=customer, store_id=1, items=[CartItem(**i) for i in SAMPLE_ITEMS])
    session: dict = {}

    def context_for(action: str, referrer: Optional[str] = None) -> CheckoutContext:
        return CheckoutContext(
            cart=cart,
            request=CheckoutRequest(
                route=RouteIdentity(CHECKOUT_CONTROLLER, action),
                referrer=referrer,
                session=session,
            ),
        )

    print("\n=== Start ===")
    result = workflow.start(context_for(ENTRY_ACTION))
    print(_describe(result))

    for _ in range(MAX_PAGES):
        nav = result.navigation
        if nav is None or not nav.is_route(CHECKOUT_CONTROLLER, nav.action or ""):
            break
        if nav.action == CONFIRM_ACTION:
            break
        if args.shipping_option:
            customer.selected_shipping_option = args.shipping_option
        if args.payment_method:
            customer.selected_payment_method = args.payment_method
        result = workflow.advance(context_for(nav.action))
        print(f"advance -> {_describe(result)}")
        if result.errors or result.navigation == nav:
            break

    if result.navigation is None or not result.navigation.is_route(CHECKOUT_CONTROLLER, CONFIRM_ACTION):
        print("Checkout did not reach the confirm page")
        return 1

    print("\n=== Complete ===")
    result = workflow.complete(context_for(CONFIRM_ACTION))
    print(_describe(result))
    for n in notifier.notifications:
        print(f"[{n.type}] {n.message}")
    return 0 if not result.errors else 1


def _post(base_url: str, path: str, payload: dict) -> dict:
    response = requests.post(f"{base_url.rstrip('/')}{path}", json=payload, timeout=DEFAULT_API_TIMEOUT_SEC)
    response.raise_for_status()
    return response.json()


def _run_api(args: argparse.Namespace) -> int:
    base_url = args.api_base_url
    response = requests.put(
        f"{base_url.rstrip('/')}/carts/{args.customer_id}",
        json={
            "is_registered": True,
            "billing_address": SAMPLE_ADDRESS,
            "shipping_address": SAMPLE_ADDRESS,
            "items": SAMPLE_ITEMS,
        },
        timeout=DEFAULT_API_TIMEOUT_SEC,
    )
    response.raise_for_status()

    session_id = uuid4().hex
    selections = {
        "shipping_option": args.shipping_option,
        "payment_method": args.payment_method,
    }

    def operation(name: str, action: str) -> dict:
        data = _post(base_url, f"/checkout/{name}", {
            "customer_id": args.customer_id,
            "session_id": session_id,
            "route": {"controller": CHECKOUT_CONTROLLER, "action": action},
            "selections": {k: v for k, v in selections.items() if v},
        })
        print(f"{name} {action} -> {json.dumps(data, ensure_ascii=False)}")
        return data

    data = operation("start", ENTRY_ACTION)
    for _ in range(MAX_PAGES):
        nav = data.get("navigation") or {}
        action = nav.get("action")
        if nav.get("kind") != "action" or nav.get("controller") != CHECKOUT_CONTROLLER or action == CONFIRM_ACTION:
            break
        data = operation("advance", action)
        if data.get("errors"):
            break

    nav = data.get("navigation") or {}
    if nav.get("action") != CONFIRM_ACTION:
        print("Checkout did not reach the confirm page")
        return 1

    data = operation("complete", CONFIRM_ACTION)
    return 0 if not data.get("errors") else 1


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "local":
            exit_code = _run_local(args)
        elif args.command == "api":
            exit_code = _run_api(args)
        else:
            raise ValueError(f"Unknown command: {args.command}")
    except ValueError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)
    except requests.RequestException as exc:
        print(f"ERROR: API request failed: {exc}")
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
