# application/services/checkout_deps.py
from __future__ import annotations

from dataclasses import dataclass, replace

from application.ports.cart_validator import CartValidatorPort
from application.ports.event_publisher import EventPublisherPort
from application.ports.logger import LoggerPort
from application.ports.notifier import NotifierPort
from application.ports.order_processing import OrderProcessingPort
from application.ports.payment_service import PaymentServicePort
from application.ports.unit_of_work import UnitOfWorkPort


@dataclass(frozen=True)
class CheckoutDeps:
    cart_validator: CartValidatorPort
    event_publisher: EventPublisherPort
    order_processing: OrderProcessingPort
    payment_service: PaymentServicePort
    notifier: NotifierPort
    unit_of_work: UnitOfWorkPort
    logger: LoggerPort

    def with_logger(self, logger: LoggerPort) -> "CheckoutDeps":
        return replace(self, logger=logger)
