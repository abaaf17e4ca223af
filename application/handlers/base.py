# application/handlers/base.py
from __future__ import annotations

from abc import ABC, abstractmethod

from application.outcome import CheckoutHandlerResult
from domain.checkout import CheckoutContext
from domain.routes import CHECKOUT_CONTROLLER, NavigationTarget, RouteIdentity


class CheckoutHandler(ABC):
    """
    One page of the checkout flow.

    Handlers are registered once at startup and must not keep per-request state.
    """

    order: int = 0
    action_name: str = ""
    controller_name: str = CHECKOUT_CONTROLLER

    def handles_route(self, route: RouteIdentity) -> bool:
        return route.matches(self.controller_name, self.action_name)

    def is_handler_for(self, context: CheckoutContext) -> bool:
        route = context.route
        return route is not None and self.handles_route(route)

    def get_action_result(self, context: CheckoutContext) -> NavigationTarget:
        return NavigationTarget.to_action(self.action_name, self.controller_name)

    @abstractmethod
    def process(self, context: CheckoutContext) -> CheckoutHandlerResult: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(order={self.order}, action={self.action_name!r})"
