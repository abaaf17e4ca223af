# application/ports/shipping.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from domain.cart import ShippingOption, ShoppingCart


class ShippingMethodProviderPort(ABC):
    @abstractmethod
    def get_shipping_options(self, cart: ShoppingCart) -> List[ShippingOption]:
        ...
