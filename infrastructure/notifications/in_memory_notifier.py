# infrastructure/notifications/in_memory_notifier.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Notification:
    type: str
    message: str


@dataclass
class InMemoryNotifier:
    """Collects the messages of one request; the API returns them with the response."""
    notifications: List[Notification] = field(default_factory=list)

    def info(self, message: str) -> None:
        self.notifications.append(Notification("info", message))

    def warning(self, message: str) -> None:
        self.notifications.append(Notification("warning", message))

    def error(self, message: str) -> None:
        self.notifications.append(Notification("error", message))
