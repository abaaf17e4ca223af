# application/ports/payment_service.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from domain.cart import ShoppingCart
from domain.payment import PostProcessPaymentRequest


class PaymentServicePort(ABC):
    @abstractmethod
    def post_process_payment(self, request: PostProcessPaymentRequest) -> None:
        """May set ``request.redirect_url`` or raise PaymentError."""
        ...


class PaymentMethodProviderPort(ABC):
    @abstractmethod
    def get_payment_methods(self, cart: ShoppingCart) -> List[str]:
        ...
