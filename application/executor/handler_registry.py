# application/executor/handler_registry.py
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from application.exceptions import CheckoutConfigurationError
from application.handlers.base import CheckoutHandler
from domain.checkout import CheckoutContext
from domain.routes import RouteIdentity


class CheckoutHandlerRegistry:
    def __init__(self, handlers: Iterable[CheckoutHandler]):
        # sorted() is stable: equal orders keep registration order
        self._handlers: Tuple[CheckoutHandler, ...] = tuple(sorted(handlers, key=lambda h: h.order))
        if not self._handlers:
            raise CheckoutConfigurationError("No checkout handlers found.")

    @property
    def handlers(self) -> Tuple[CheckoutHandler, ...]:
        return self._handlers

    @property
    def first(self) -> CheckoutHandler:
        return self._handlers[0]

    @property
    def last(self) -> CheckoutHandler:
        return self._handlers[-1]

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self):
        return iter(self._handlers)

    def find_for(self, context: CheckoutContext) -> Optional[CheckoutHandler]:
        for h in self._handlers:
            if h.is_handler_for(context):
                return h
        return None

    def find_for_route(self, route: RouteIdentity) -> Optional[CheckoutHandler]:
        for h in self._handlers:
            if h.handles_route(route):
                return h
        return None

    def following(self, handler: CheckoutHandler) -> List[CheckoutHandler]:
        return [h for h in self._handlers if h.order > handler.order]

    def preceding(self, handler: CheckoutHandler) -> List[CheckoutHandler]:
        return [h for h in self._handlers if h.order < handler.order]
