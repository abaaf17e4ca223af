# domain/events.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from domain.cart import CartItem, ShoppingCart
from domain.routes import NavigationTarget


@dataclass
class ValidatingCartEvent:
    """
    Published before the customer enters checkout and again before the order is placed.

    Subscribers may append to ``warnings`` or set ``result`` to take over navigation.
    """
    cart: ShoppingCart
    warnings: List[str]
    result: Optional[NavigationTarget] = None


@dataclass
class CartItemValidationContext:
    store_id: int
    item: CartItem
    child_items: List[CartItem] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
