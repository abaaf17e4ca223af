# infrastructure/cart/in_memory_cart_repository.py
from __future__ import annotations

from threading import Lock
from typing import Dict, Optional

from application.ports.cart_repository import CartRepositoryPort
from domain.cart import ShoppingCart


class InMemoryCartRepository(CartRepositoryPort):
    """Carts live in memory and are mutated in place, so saving only counts commits."""

    def __init__(self) -> None:
        self._carts: Dict[int, ShoppingCart] = {}
        self._lock = Lock()
        self.save_count = 0

    def get(self, customer_id: int) -> Optional[ShoppingCart]:
        with self._lock:
            return self._carts.get(customer_id)

    def put(self, cart: ShoppingCart) -> None:
        with self._lock:
            self._carts[cart.customer.id] = cart

    def save_changes(self) -> None:
        with self._lock:
            self.save_count += 1
