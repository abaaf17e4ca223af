# application/executor/checkout_workflow.py
from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import replace
from typing import Dict, Iterator, List, Optional

from application.exceptions import CheckoutConfigurationError
from application.executor.handler_registry import CheckoutHandlerRegistry
from application.executor.navigation import NavigationResolver
from application.handlers.base import CheckoutHandler
from application.outcome import CheckoutHandlerResult
from application.ports.logger import LoggerPort
from application.services.checkout_deps import CheckoutDeps
from application.services.text_formatter import plain_text_to_html
from domain.checkout import (
    ORDER_PAYMENT_INFO_KEY,
    CheckoutContext,
    CheckoutWorkflowError,
    CheckoutWorkflowResult,
)
from domain.events import CartItemValidationContext, ValidatingCartEvent
from domain.exceptions import PaymentError
from domain.payment import OrderPlacementResult, PostProcessPaymentRequest, ProcessPaymentRequest
from domain.routes import (
    COMPLETED_ACTION,
    CONFIRM_ACTION,
    ENTRY_ACTION,
    PAYMENT_METHOD_ACTION,
    NavigationTarget,
    redirect_to_cart,
    redirect_to_checkout,
)
from domain.settings import OrderSettings, ShoppingCartSettings

MAX_WARNINGS = 3

MIN_ORDER_PLACEMENT_INTERVAL_MESSAGE = (
    "Please wait several seconds before placing a new order "
    "(already placed another order several seconds ago)."
)

ORDER_PLACEMENT_FAILED_MESSAGE = "Your order could not be placed. Please try again."

# posted form field -> extra data key handed to order placement
EXTRA_DATA_FORM_FIELDS = {
    "CustomerComment": "customercommenthidden",
    "SubscribeToNewsletter": "SubscribeToNewsletter",
    "AcceptThirdPartyEmailHandOver": "AcceptThirdPartyEmailHandOver",
}


class CheckoutWorkflow:
    """
    Drives the customer through the registered checkout handlers.

    Every public operation returns a CheckoutWorkflowResult; only wiring defects
    (no request, no handlers) raise.
    """

    def __init__(
        self,
        registry: CheckoutHandlerRegistry,
        deps: CheckoutDeps,
        order_settings: OrderSettings,
        cart_settings: ShoppingCartSettings,
        navigation: Optional[NavigationResolver] = None,
    ):
        self._registry = registry
        self._deps = deps
        self._order_settings = order_settings
        self._cart_settings = cart_settings
        self._navigation = navigation or NavigationResolver(registry)

    def start(self, context: CheckoutContext) -> CheckoutWorkflowResult:
        preliminary = self._preliminary(context)
        if preliminary is not None:
            return CheckoutWorkflowResult(preliminary)

        deps = self._bind(context)
        cart = context.cart
        warnings: List[str] = []
        deps.logger.info("checkout.start", items=len(cart.items))

        cart.customer.reset_checkout_data()
        context.abandon_checkout_state()

        if deps.cart_validator.validate_cart(cart, warnings, True):
            event = ValidatingCartEvent(cart, warnings)
            deps.event_publisher.publish(event)
            if event.result is not None:
                return CheckoutWorkflowResult(event.result)

            for item in cart.items:
                if warnings:
                    break
                item_ctx = CartItemValidationContext(
                    store_id=cart.store_id,
                    item=item,
                    child_items=list(item.child_items),
                )
                if not deps.cart_validator.validate_cart_item(item_ctx, cart.items):
                    warnings.extend(item_ctx.warnings)

        deps.unit_of_work.save_changes()

        if warnings:
            self._notify_warnings(deps, warnings)
            deps.logger.info("checkout.cart_invalid", warnings=len(warnings))
            return CheckoutWorkflowResult(redirect_to_cart())

        return self.advance(context)

    def process(self, context: CheckoutContext) -> CheckoutWorkflowResult:
        preliminary = self._preliminary(context)
        if preliminary is not None:
            return CheckoutWorkflowResult(preliminary)

        deps = self._bind(context)

        # first match wins, a route is expected to belong to one handler only
        handler = self._registry.find_for(context)
        if handler is None:
            return CheckoutWorkflowResult()

        result = self._run_handler(handler, context, deps.logger)
        if result.skip_page:
            if result.action_result is not None:
                return CheckoutWorkflowResult(result.action_result)
            resolution = self._navigation.resolve_skip_direction(
                handler, context.request.referrer, context
            )
            deps.logger.info(
                "checkout.page_skipped",
                handler=handler.action_name,
                direction=resolution.direction.value,
            )
            return CheckoutWorkflowResult(resolution.navigation)

        return CheckoutWorkflowResult(None, list(result.errors))

    def advance(self, context: CheckoutContext) -> CheckoutWorkflowResult:
        preliminary = self._preliminary(context)
        if preliminary is not None:
            return CheckoutWorkflowResult(preliminary)

        deps = self._bind(context)

        if self._cart_settings.quick_checkout_enabled:
            for handler in self._registry:
                result = self._run_handler(handler, context, deps.logger)
                if not result.success:
                    return self._handler_failure(handler, result, context)
            return CheckoutWorkflowResult(redirect_to_checkout(CONFIRM_ACTION))

        if context.is_current_route(None, ENTRY_ACTION):
            return CheckoutWorkflowResult(self._registry.first.get_action_result(context))

        handler = self._registry.find_for(context)
        if handler is not None:
            result = self._run_handler(handler, context, deps.logger)
            if not result.success:
                return self._handler_failure(handler, result, context)

            if handler is self._registry.last:
                return CheckoutWorkflowResult(redirect_to_checkout(CONFIRM_ACTION))

            next_handler = self._navigation.next(handler)
            if next_handler is not None:
                return CheckoutWorkflowResult(next_handler.get_action_result(context))

        deps.logger.debug("checkout.advance.no_target", route=str(context.route))
        return CheckoutWorkflowResult()

    def complete(self, context: CheckoutContext) -> CheckoutWorkflowResult:
        preliminary = self._preliminary(context)
        if preliminary is not None:
            return CheckoutWorkflowResult(preliminary)

        deps = self._bind(context)
        cart = context.cart
        customer = cart.customer
        warnings: List[str] = []

        event = ValidatingCartEvent(cart, warnings)
        deps.event_publisher.publish(event)
        if event.result is not None:
            return CheckoutWorkflowResult(event.result)

        if warnings:
            self._notify_warnings(deps, warnings)
            return CheckoutWorkflowResult(redirect_to_cart())

        # two orders within a short time span are treated as a double submit
        if not deps.order_processing.is_minimum_order_placement_interval_valid(customer, cart.store_id):
            deps.notifier.warning(MIN_ORDER_PLACEMENT_INTERVAL_MESSAGE)
            return CheckoutWorkflowResult(redirect_to_checkout(CONFIRM_ACTION))

        try:
            payment_request = self._build_payment_request(context)
            extra_data = self._build_extra_data(context)
            placement = deps.order_processing.place_order(payment_request, extra_data)
        except PaymentError as exc:
            return CheckoutWorkflowResult(self._payment_failure(deps, exc, "place_order"))
        except Exception as exc:
            deps.logger.error("checkout.order.placement_failed", error=str(exc), error_type=type(exc).__name__)
            return CheckoutWorkflowResult(None, [CheckoutWorkflowError("", str(exc) or ORDER_PLACEMENT_FAILED_MESSAGE)])

        if placement is None or not placement.success:
            return CheckoutWorkflowResult(None, self._placement_errors(placement))

        if placement.placed_order is None:
            deps.logger.error("checkout.order.placement_failed", error="placement succeeded without an order")
            return CheckoutWorkflowResult(None, [CheckoutWorkflowError("", ORDER_PLACEMENT_FAILED_MESSAGE)])

        order = placement.placed_order
        deps.logger.info("checkout.order.placed", order_id=order.id, order_guid=order.order_guid)

        post_request = PostProcessPaymentRequest(order=order)
        with self._payment_session_scope(context):
            try:
                deps.payment_service.post_process_payment(post_request)
            except PaymentError as exc:
                return CheckoutWorkflowResult(self._payment_failure(deps, exc, "post_process_payment"))
            except Exception as exc:
                # the order exists already, it is not rolled back
                deps.logger.warning("checkout.post_payment.failed", order_id=order.id, error=str(exc))
                deps.notifier.error(str(exc))

        if post_request.redirect_url:
            return CheckoutWorkflowResult(NavigationTarget.to_url(post_request.redirect_url))

        return CheckoutWorkflowResult(redirect_to_checkout(COMPLETED_ACTION))

    def _preliminary(self, context: CheckoutContext) -> Optional[NavigationTarget]:
        """Checks whether checkout can run at all, e.g. whether the cart has items."""
        if context is None or context.request is None:
            raise CheckoutConfigurationError(
                "The checkout workflow is only applicable in the context of a HTTP request."
            )

        if len(self._registry) == 0:
            raise CheckoutConfigurationError("No checkout handlers found.")

        cart = context.cart
        if not self._order_settings.anonymous_checkout_allowed and not cart.customer.is_registered:
            return NavigationTarget.challenge()

        if not cart.has_items:
            return redirect_to_cart()

        return None

    def _bind(self, context: CheckoutContext) -> CheckoutDeps:
        cart = context.cart
        logger = self._deps.logger.bind(customer_id=cart.customer.id, store_id=cart.store_id)
        return self._deps.with_logger(logger)

    def _run_handler(
        self,
        handler: CheckoutHandler,
        context: CheckoutContext,
        logger: LoggerPort,
    ) -> CheckoutHandlerResult:
        t0 = time.perf_counter()
        result = handler.process(context)
        if result is None:
            raise RuntimeError(f"Checkout handler returned None: {type(handler).__name__}")

        logger.info(
            "checkout.handler.processed",
            handler=type(handler).__name__,
            order=handler.order,
            success=result.success,
            skip_page=result.skip_page,
            elapsed_ms=int((time.perf_counter() - t0) * 1000),
        )
        return result

    def _handler_failure(
        self,
        handler: CheckoutHandler,
        result: CheckoutHandlerResult,
        context: CheckoutContext,
    ) -> CheckoutWorkflowResult:
        navigation = result.action_result or handler.get_action_result(context)
        return CheckoutWorkflowResult(navigation, list(result.errors))

    def _notify_warnings(self, deps: CheckoutDeps, warnings: List[str]) -> None:
        for warning in warnings[:MAX_WARNINGS]:
            deps.notifier.warning(warning)

    def _build_payment_request(self, context: CheckoutContext) -> ProcessPaymentRequest:
        cart = context.cart
        cached = context.request.session.get(ORDER_PAYMENT_INFO_KEY)
        if not isinstance(cached, ProcessPaymentRequest):
            cached = ProcessPaymentRequest()

        return replace(
            cached,
            store_id=cart.store_id,
            customer_id=cart.customer.id,
            payment_method_system_name=cart.customer.selected_payment_method,
            payment_data=dict(cached.payment_data),
        )

    def _build_extra_data(self, context: CheckoutContext) -> Dict[str, str]:
        form = context.request.form
        return {key: str(form.get(field, "")) for key, field in EXTRA_DATA_FORM_FIELDS.items()}

    def _placement_errors(self, placement: Optional[OrderPlacementResult]) -> List[CheckoutWorkflowError]:
        if placement is None:
            return []
        return [
            CheckoutWorkflowError("", plain_text_to_html(message))
            for message in placement.errors[:MAX_WARNINGS]
        ]

    def _payment_failure(self, deps: CheckoutDeps, exc: PaymentError, stage: str) -> NavigationTarget:
        deps.logger.error("checkout.payment.failed", stage=stage, error=str(exc))
        deps.notifier.error(str(exc))

        if exc.redirect_route is not None:
            return exc.redirect_route
        return redirect_to_checkout(PAYMENT_METHOD_ACTION)

    @contextmanager
    def _payment_session_scope(self, context: CheckoutContext) -> Iterator[None]:
        """Drop the cached payment info and the checkout state however post-processing ends."""
        try:
            yield
        finally:
            context.request.session.pop(ORDER_PAYMENT_INFO_KEY, None)
            context.abandon_checkout_state()
