# infrastructure/config/settings_loader.py
"""
Loads checkout settings from a YAML file, then applies environment overrides.

Environment variables (a project-root .env file is honoured):
  CHECKOUT_CONFIG_FILE              path of the YAML file
  CHECKOUT_ANONYMOUS_ALLOWED        true/false
  CHECKOUT_QUICK_ENABLED            true/false
  CHECKOUT_MIN_ORDER_INTERVAL_SEC   integer seconds
"""
from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from dotenv import load_dotenv

from domain.cart import ShippingOption
from domain.exceptions import ValidationError
from domain.settings import (
    CatalogSettings,
    CheckoutConfig,
    OrderSettings,
    PaymentSettings,
    ShippingSettings,
    ShoppingCartSettings,
)

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_FILE = PROJECT_ROOT / "config" / "checkout.yaml"

_env_path = PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class CheckoutSettingsLoader:
    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def load(self, path: Optional[Path] = None) -> CheckoutConfig:
        if path is None:
            path = Path(self._environ.get("CHECKOUT_CONFIG_FILE") or DEFAULT_CONFIG_FILE)

        data: Dict[str, Any] = {}
        if path.exists():
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValidationError(f"Checkout config is invalid: {path}")

        config = self.load_from_dict(data)
        return self._apply_env(config)

    def load_from_dict(self, data: Dict[str, Any]) -> CheckoutConfig:
        order = data.get("order") or {}
        cart = data.get("shopping_cart") or {}
        shipping = data.get("shipping") or {}
        payment = data.get("payment") or {}
        catalog = data.get("catalog") or {}

        return CheckoutConfig(
            order=OrderSettings(
                anonymous_checkout_allowed=_as_bool(order.get("anonymous_checkout_allowed", True), "order.anonymous_checkout_allowed"),
                min_order_placement_interval_sec=_as_int(order.get("min_order_placement_interval_sec", 30), "order.min_order_placement_interval_sec"),
            ),
            shopping_cart=ShoppingCartSettings(
                quick_checkout_enabled=_as_bool(cart.get("quick_checkout_enabled", False), "shopping_cart.quick_checkout_enabled"),
            ),
            shipping=ShippingSettings(
                skip_if_single_option=_as_bool(shipping.get("skip_if_single_option", True), "shipping.skip_if_single_option"),
                options=[self._load_shipping_option(o) for o in _as_list(shipping.get("options"), "shipping.options")],
            ),
            payment=PaymentSettings(
                skip_if_single_method=_as_bool(payment.get("skip_if_single_method", True), "payment.skip_if_single_method"),
                methods=[str(m) for m in _as_list(payment.get("methods"), "payment.methods")],
                redirect_urls={str(k): str(v) for k, v in (payment.get("redirect_urls") or {}).items()},
            ),
            catalog=CatalogSettings(
                stock={str(k): _as_int(v, f"catalog.stock.{k}") for k, v in (catalog.get("stock") or {}).items()},
            ),
        )

    def _load_shipping_option(self, data: Any) -> ShippingOption:
        if isinstance(data, str):
            return ShippingOption(system_name=data, name=data)
        if not isinstance(data, dict) or "system_name" not in data:
            raise ValidationError(f"Invalid shipping option: {data!r}")
        return ShippingOption(system_name=str(data["system_name"]), name=str(data.get("name", data["system_name"])))

    def _apply_env(self, config: CheckoutConfig) -> CheckoutConfig:
        env = self._environ
        order = config.order
        cart = config.shopping_cart

        if env.get("CHECKOUT_ANONYMOUS_ALLOWED"):
            order = replace(order, anonymous_checkout_allowed=_as_bool(env["CHECKOUT_ANONYMOUS_ALLOWED"], "CHECKOUT_ANONYMOUS_ALLOWED"))
        if env.get("CHECKOUT_MIN_ORDER_INTERVAL_SEC"):
            order = replace(order, min_order_placement_interval_sec=_as_int(env["CHECKOUT_MIN_ORDER_INTERVAL_SEC"], "CHECKOUT_MIN_ORDER_INTERVAL_SEC"))
        if env.get("CHECKOUT_QUICK_ENABLED"):
            cart = replace(cart, quick_checkout_enabled=_as_bool(env["CHECKOUT_QUICK_ENABLED"], "CHECKOUT_QUICK_ENABLED"))

        return replace(config, order=order, shopping_cart=cart)


def _as_list(value: Any, name: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{name} must be a list, got {value!r}")
    return value


def _as_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValidationError(f"{name} must be a boolean, got {value!r}")


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    try:
        result = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if result < 0:
        raise ValidationError(f"{name} must not be negative")
    return result
