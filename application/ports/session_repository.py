# application/ports/session_repository.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

from domain.ids import SessionId


class SessionRepositoryPort(ABC):
    @abstractmethod
    def get_or_create(self, session_id: SessionId) -> Dict[str, Any]:
        """Return the mutable key-value storage of the given browser session."""
        ...
