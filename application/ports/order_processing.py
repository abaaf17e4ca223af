# application/ports/order_processing.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict

from domain.cart import Customer
from domain.payment import OrderPlacementResult, ProcessPaymentRequest


class OrderProcessingPort(ABC):
    @abstractmethod
    def is_minimum_order_placement_interval_valid(self, customer: Customer, store_id: int) -> bool:
        ...

    @abstractmethod
    def place_order(
        self,
        payment_request: ProcessPaymentRequest,
        extra_data: Dict[str, str],
    ) -> OrderPlacementResult:
        """May raise PaymentError."""
        ...
