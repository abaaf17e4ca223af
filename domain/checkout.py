# domain/checkout.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from domain.cart import ShoppingCart
from domain.routes import NavigationTarget, RouteIdentity


# well-known session keys
ORDER_PAYMENT_INFO_KEY = "OrderPaymentInfo"
CHECKOUT_STATE_KEY = "CheckoutState"


@dataclass
class CheckoutState:
    is_payment_selection_skipped: bool = False


@dataclass
class CheckoutRequest:
    route: RouteIdentity
    referrer: Optional[str] = None
    form: Dict[str, str] = field(default_factory=dict)
    session: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CheckoutContext:
    cart: ShoppingCart
    request: Optional[CheckoutRequest] = None

    @property
    def route(self) -> Optional[RouteIdentity]:
        return self.request.route if self.request else None

    def is_current_route(self, controller: Optional[str], action: str) -> bool:
        route = self.route
        return route is not None and route.matches(controller, action)

    def get_checkout_state(self) -> CheckoutState:
        session = self.request.session
        state = session.get(CHECKOUT_STATE_KEY)
        if state is None:
            state = CheckoutState()
            session[CHECKOUT_STATE_KEY] = state
        return state

    def abandon_checkout_state(self) -> None:
        if self.request is not None:
            self.request.session.pop(CHECKOUT_STATE_KEY, None)


@dataclass(frozen=True)
class CheckoutWorkflowError:
    key: str
    message: str


@dataclass(frozen=True)
class CheckoutWorkflowResult:
    navigation: Optional[NavigationTarget] = None
    errors: List[CheckoutWorkflowError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0
