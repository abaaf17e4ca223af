# application/ports/event_publisher.py
from __future__ import annotations

from typing import Any, Protocol


class EventPublisherPort(Protocol):
    def publish(self, event: Any) -> None:
        ...
