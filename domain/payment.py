# domain/payment.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ProcessPaymentRequest:
    store_id: int = 0
    customer_id: int = 0
    payment_method_system_name: Optional[str] = None
    payment_data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PlacedOrder:
    id: int
    order_guid: str
    customer_id: int
    store_id: int
    payment_method_system_name: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class OrderPlacementResult:
    success: bool
    placed_order: Optional[PlacedOrder] = None
    errors: List[str] = field(default_factory=list)


@dataclass
class PostProcessPaymentRequest:
    order: PlacedOrder
    redirect_url: Optional[str] = None  # set by the payment provider
