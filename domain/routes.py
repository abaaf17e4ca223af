# domain/routes.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


CHECKOUT_CONTROLLER = "Checkout"
CART_CONTROLLER = "ShoppingCart"

ENTRY_ACTION = "Index"
CONFIRM_ACTION = "Confirm"
COMPLETED_ACTION = "Completed"
PAYMENT_METHOD_ACTION = "PaymentMethod"
CART_ACTION = "Cart"


@dataclass(frozen=True)
class RouteIdentity:
    controller: str
    action: str

    def matches(self, controller: Optional[str], action: str) -> bool:
        """controller=None matches any controller."""
        if controller is not None and self.controller.lower() != controller.lower():
            return False
        return self.action.lower() == action.lower()


class NavigationKind(str, Enum):
    ACTION = "action"
    URL = "url"
    CHALLENGE = "challenge"


@dataclass(frozen=True)
class NavigationTarget:
    kind: NavigationKind
    controller: Optional[str] = None
    action: Optional[str] = None
    route_values: Dict[str, Any] = field(default_factory=dict)
    url: Optional[str] = None

    @classmethod
    def to_action(
        cls,
        action: str,
        controller: str,
        route_values: Optional[Dict[str, Any]] = None,
    ) -> "NavigationTarget":
        return cls(
            kind=NavigationKind.ACTION,
            controller=controller,
            action=action,
            route_values=dict(route_values or {}),
        )

    @classmethod
    def to_url(cls, url: str) -> "NavigationTarget":
        return cls(kind=NavigationKind.URL, url=url)

    @classmethod
    def challenge(cls) -> "NavigationTarget":
        return cls(kind=NavigationKind.CHALLENGE)

    def is_route(self, controller: str, action: str) -> bool:
        if self.kind is not NavigationKind.ACTION:
            return False
        return RouteIdentity(self.controller or "", self.action or "").matches(controller, action)


def redirect_to_checkout(action: str) -> NavigationTarget:
    return NavigationTarget.to_action(action, CHECKOUT_CONTROLLER)


# Always an explicit controller/action pair; a named cart route would loop back into checkout.
def redirect_to_cart() -> NavigationTarget:
    return NavigationTarget.to_action(CART_ACTION, CART_CONTROLLER)
