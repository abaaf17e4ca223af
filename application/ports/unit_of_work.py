# application/ports/unit_of_work.py
from __future__ import annotations

from typing import Protocol


class UnitOfWorkPort(Protocol):
    def save_changes(self) -> None:
        ...
