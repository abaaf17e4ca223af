# infrastructure/events/in_memory_event_publisher.py
from __future__ import annotations

from threading import Lock
from typing import Any, Callable, List, Tuple, Type


class InMemoryEventPublisher:
    def __init__(self) -> None:
        self._subscribers: List[Tuple[Type, Callable[[Any], None]]] = []
        self._lock = Lock()

    def subscribe(self, event_type: Type, handler: Callable[[Any], None]) -> None:
        with self._lock:
            self._subscribers.append((event_type, handler))

    def publish(self, event: Any) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for event_type, handler in subscribers:
            if isinstance(event, event_type):
                handler(event)
