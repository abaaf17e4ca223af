# infrastructure/orders/in_memory_order_processing.py
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Dict, List, Optional, Tuple

from application.ports.order_processing import OrderProcessingPort
from domain.cart import Customer
from domain.payment import OrderPlacementResult, PlacedOrder, ProcessPaymentRequest
from domain.settings import OrderSettings


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryOrderProcessingService(OrderProcessingPort):
    """
    Keeps placed orders in memory.

    The minimum placement interval is checked again under the lock when an order
    is placed, so two racing submissions cannot both succeed inside the interval.
    """

    def __init__(self, settings: OrderSettings, clock: Callable[[], datetime] = _utcnow) -> None:
        self._interval = timedelta(seconds=settings.min_order_placement_interval_sec)
        self._clock = clock
        self._lock = Lock()
        self._orders: List[PlacedOrder] = []
        self._last_order_at: Dict[Tuple[int, int], datetime] = {}

    @property
    def orders(self) -> List[PlacedOrder]:
        with self._lock:
            return list(self._orders)

    def is_minimum_order_placement_interval_valid(self, customer: Customer, store_id: int) -> bool:
        with self._lock:
            return self._interval_valid(customer.id, store_id, self._clock())

    def place_order(
        self,
        payment_request: ProcessPaymentRequest,
        extra_data: Dict[str, str],
    ) -> OrderPlacementResult:
        if not payment_request.payment_method_system_name:
            return OrderPlacementResult(success=False, errors=["Payment method is not selected."])

        key = (payment_request.customer_id, payment_request.store_id)
        with self._lock:
            now = self._clock()
            if not self._interval_valid(*key, now):
                return OrderPlacementResult(
                    success=False,
                    errors=["Another order was placed a moment ago."],
                )

            order = PlacedOrder(
                id=len(self._orders) + 1,
                order_guid=uuid.uuid4().hex,
                customer_id=payment_request.customer_id,
                store_id=payment_request.store_id,
                payment_method_system_name=payment_request.payment_method_system_name,
                created_at=now,
            )
            self._orders.append(order)
            self._last_order_at[key] = now
            return OrderPlacementResult(success=True, placed_order=order)

    def last_order_at(self, customer_id: int, store_id: int) -> Optional[datetime]:
        with self._lock:
            return self._last_order_at.get((customer_id, store_id))

    def _interval_valid(self, customer_id: int, store_id: int, now: datetime) -> bool:
        last = self._last_order_at.get((customer_id, store_id))
        if last is None or self._interval.total_seconds() <= 0:
            return True
        return now - last >= self._interval
