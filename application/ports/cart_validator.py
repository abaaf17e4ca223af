# application/ports/cart_validator.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from domain.cart import CartItem, ShoppingCart
from domain.events import CartItemValidationContext


class CartValidatorPort(ABC):
    @abstractmethod
    def validate_cart(
        self,
        cart: ShoppingCart,
        warnings: List[str],
        validate_checkout_attributes: bool = False,
    ) -> bool:
        """Append cart-level warnings to ``warnings``; return True when the cart is valid."""
        ...

    @abstractmethod
    def validate_cart_item(self, ctx: CartItemValidationContext, cart_items: List[CartItem]) -> bool:
        """Append line-item warnings to ``ctx.warnings``; return True when the item is valid."""
        ...
