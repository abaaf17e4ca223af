# infrastructure/logging/loguru_logger.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict

from loguru import logger as _loguru

from application.ports.logger import LoggerPort


@dataclass(frozen=True)
class LoguruLogger(LoggerPort):
    bound: Dict[str, Any] = field(default_factory=dict)

    def bind(self, **fields: Any) -> "LoguruLogger":
        merged = dict(self.bound)
        merged.update(fields)
        return LoguruLogger(bound=merged)

    def debug(self, event: str, **fields: Any) -> None:
        self._emit("DEBUG", event, fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit("INFO", event, fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._emit("WARNING", event, fields)

    def error(self, event: str, **fields: Any) -> None:
        self._emit("ERROR", event, fields)

    def _emit(self, level: str, event: str, fields: Dict[str, Any]) -> None:
        payload = dict(self.bound)
        payload.update(fields)
        payload.setdefault("type", event)
        message = f"{event} {json.dumps(payload, ensure_ascii=False, default=str)}"
        _loguru.bind(**payload).log(level, message)
