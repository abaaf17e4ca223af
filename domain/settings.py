# domain/settings.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from domain.cart import ShippingOption


@dataclass(frozen=True)
class OrderSettings:
    anonymous_checkout_allowed: bool = True
    min_order_placement_interval_sec: int = 30


@dataclass(frozen=True)
class ShoppingCartSettings:
    quick_checkout_enabled: bool = False


@dataclass(frozen=True)
class ShippingSettings:
    skip_if_single_option: bool = True
    options: List[ShippingOption] = field(default_factory=list)


@dataclass(frozen=True)
class PaymentSettings:
    skip_if_single_method: bool = True
    methods: List[str] = field(default_factory=list)
    # payment method system name -> redirect url template, "{order_guid}" is substituted
    redirect_urls: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CatalogSettings:
    stock: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class CheckoutConfig:
    order: OrderSettings = field(default_factory=OrderSettings)
    shopping_cart: ShoppingCartSettings = field(default_factory=ShoppingCartSettings)
    shipping: ShippingSettings = field(default_factory=ShippingSettings)
    payment: PaymentSettings = field(default_factory=PaymentSettings)
    catalog: CatalogSettings = field(default_factory=CatalogSettings)
