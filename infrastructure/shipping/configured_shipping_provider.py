# infrastructure/shipping/configured_shipping_provider.py
from __future__ import annotations

from typing import List

from application.ports.shipping import ShippingMethodProviderPort
from domain.cart import ShippingOption, ShoppingCart
from domain.settings import ShippingSettings


class ConfiguredShippingMethodProvider(ShippingMethodProviderPort):
    def __init__(self, settings: ShippingSettings):
        self._settings = settings

    def get_shipping_options(self, cart: ShoppingCart) -> List[ShippingOption]:
        if not cart.requires_shipping:
            return []
        return list(self._settings.options)
