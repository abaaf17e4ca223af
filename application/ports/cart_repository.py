# application/ports/cart_repository.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from domain.cart import ShoppingCart


class CartRepositoryPort(ABC):
    @abstractmethod
    def get(self, customer_id: int) -> Optional[ShoppingCart]:
        ...

    @abstractmethod
    def put(self, cart: ShoppingCart) -> None:
        ...

    @abstractmethod
    def save_changes(self) -> None:
        ...
