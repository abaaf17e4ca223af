# domain/ids.py
from dataclasses import dataclass

from domain.exceptions import ValidationError


@dataclass(frozen=True)
class SessionId:
    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationError("Session id must not be empty")


@dataclass(frozen=True)
class CustomerId:
    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValidationError("Customer id must be positive")
