# infrastructure/cart/catalog_cart_validator.py
from __future__ import annotations

from typing import List

from application.ports.cart_validator import CartValidatorPort
from domain.cart import CartItem, ShoppingCart
from domain.events import CartItemValidationContext
from domain.settings import CatalogSettings


class CatalogCartValidator(CartValidatorPort):
    """
    Checks cart lines against the configured catalog stock.

    A SKU that is not listed in the catalog is treated as no longer available.
    """

    def __init__(self, catalog: CatalogSettings):
        self._catalog = catalog

    def validate_cart(
        self,
        cart: ShoppingCart,
        warnings: List[str],
        validate_checkout_attributes: bool = False,
    ) -> bool:
        before = len(warnings)
        for item in cart.items:
            if item.quantity <= 0:
                warnings.append(f"The quantity of '{item.name}' must be greater than zero.")
        return len(warnings) == before

    def validate_cart_item(self, ctx: CartItemValidationContext, cart_items: List[CartItem]) -> bool:
        for item in [ctx.item, *ctx.child_items]:
            self._validate_stock(item, cart_items, ctx.warnings)
        return not ctx.warnings

    def _validate_stock(self, item: CartItem, cart_items: List[CartItem], warnings: List[str]) -> None:
        stock = self._catalog.stock.get(item.sku)
        if stock is None:
            warnings.append(f"'{item.name}' is no longer available.")
            return

        # the same SKU may appear on several lines
        requested = sum(i.quantity for i in cart_items if i.sku == item.sku) or item.quantity
        if requested > stock:
            warnings.append(f"Only {stock} item(s) of '{item.name}' are in stock.")
