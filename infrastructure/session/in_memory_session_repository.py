# infrastructure/session/in_memory_session_repository.py
from __future__ import annotations

from threading import Lock
from typing import Any, Dict

from application.ports.session_repository import SessionRepositoryPort
from domain.ids import SessionId


class InMemorySessionRepository(SessionRepositoryPort):
    def __init__(self) -> None:
        self._sessions: Dict[str, Dict[str, Any]] = {}
        self._lock = Lock()

    def get_or_create(self, session_id: SessionId) -> Dict[str, Any]:
        with self._lock:
            return self._sessions.setdefault(session_id.value, {})
