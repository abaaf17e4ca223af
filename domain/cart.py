# domain/cart.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Address:
    first_name: str
    last_name: str
    street: str
    city: str
    zip_code: str
    country_code: str
    email: Optional[str] = None


@dataclass(frozen=True)
class ShippingOption:
    system_name: str
    name: str


@dataclass
class Customer:
    id: int
    is_registered: bool = False
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None

    # checkout data, cleared whenever a new checkout starts
    selected_shipping_option: Optional[str] = None
    offered_shipping_options: List[ShippingOption] = field(default_factory=list)
    selected_payment_method: Optional[str] = None

    def reset_checkout_data(self) -> None:
        self.selected_shipping_option = None
        self.offered_shipping_options = []
        self.selected_payment_method = None


@dataclass(frozen=True)
class CartItem:
    sku: str
    name: str
    quantity: int = 1
    is_ship_enabled: bool = True
    child_items: List["CartItem"] = field(default_factory=list)


@dataclass
class ShoppingCart:
    customer: Customer
    store_id: int
    items: List[CartItem] = field(default_factory=list)

    @property
    def has_items(self) -> bool:
        return len(self.items) > 0

    @property
    def requires_shipping(self) -> bool:
        return any(item.is_ship_enabled for item in self.items)
