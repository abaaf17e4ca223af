# application/executor/navigation.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from application.executor.handler_registry import CheckoutHandlerRegistry
from application.handlers.base import CheckoutHandler
from application.services.referrer_parser import ReferrerParser
from domain.checkout import CheckoutContext
from domain.routes import (
    CHECKOUT_CONTROLLER,
    CONFIRM_ACTION,
    ENTRY_ACTION,
    NavigationTarget,
    redirect_to_cart,
    redirect_to_checkout,
)


class NavigationDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class SkipResolution:
    direction: NavigationDirection
    navigation: NavigationTarget


class NavigationResolver:
    def __init__(self, registry: CheckoutHandlerRegistry, referrer_parser: Optional[ReferrerParser] = None):
        self._registry = registry
        self._referrer_parser = referrer_parser or ReferrerParser()

    def next(self, handler: CheckoutHandler) -> Optional[CheckoutHandler]:
        candidates = self._registry.following(handler)
        if not candidates:
            return None
        return min(candidates, key=lambda h: h.order)

    def previous(self, handler: CheckoutHandler) -> Optional[CheckoutHandler]:
        candidates = self._registry.preceding(handler)
        if not candidates:
            return None
        # max() keeps the first of equal orders, matching next()
        return max(candidates, key=lambda h: h.order)

    def adjacent(self, handler: CheckoutHandler, forward: bool) -> Optional[CheckoutHandler]:
        return self.next(handler) if forward else self.previous(handler)

    def resolve_skip_direction(
        self,
        handler: CheckoutHandler,
        referrer: Optional[str],
        context: CheckoutContext,
    ) -> SkipResolution:
        """
        The page of ``handler`` must always be skipped (e.g. the store offers a single
        shipping method). Depending on where the customer came from, send them on to the
        next page or back to the previous one.
        """
        forward = self._is_forward(handler, referrer)
        direction = NavigationDirection.FORWARD if forward else NavigationDirection.BACKWARD

        target = self.adjacent(handler, forward)
        if target is not None:
            navigation = target.get_action_result(context)
        elif forward:
            navigation = redirect_to_checkout(CONFIRM_ACTION)
        else:
            navigation = redirect_to_cart()

        return SkipResolution(direction=direction, navigation=navigation)

    def _is_forward(self, handler: CheckoutHandler, referrer: Optional[str]) -> bool:
        route = self._referrer_parser.parse(referrer)
        if route is None:
            return True

        if route.matches(CHECKOUT_CONTROLLER, ENTRY_ACTION):
            return True
        if route.matches(CHECKOUT_CONTROLLER, CONFIRM_ACTION):
            return False

        referrer_handler = self._registry.find_for_route(route)
        if referrer_handler is None:
            return True
        return referrer_handler.order < handler.order
