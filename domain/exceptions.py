# domain/exceptions.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from domain.routes import NavigationTarget


class DomainError(Exception):
    pass


class ValidationError(DomainError):
    pass


class PaymentError(DomainError):
    """
    Raised by payment collaborators when placing or post-processing an order fails
    for a payment-specific reason.

    redirect_route, when given, is where the customer should be sent instead of the
    payment method selection page.
    """

    def __init__(self, message: str, redirect_route: Optional["NavigationTarget"] = None):
        super().__init__(message)
        self.redirect_route = redirect_route
