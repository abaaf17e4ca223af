"""FastAPI application - checkout workflow endpoints"""
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

from fastapi import Body, FastAPI, HTTPException
from pydantic import BaseModel, Field

from application.exceptions import CheckoutConfigurationError
from application.executor.checkout_workflow import CheckoutWorkflow
from application.executor.handler_registry import CheckoutHandlerRegistry
from application.handlers.address_handlers import BillingAddressHandler, ShippingAddressHandler
from application.handlers.payment_method_handler import PaymentMethodHandler
from application.handlers.shipping_method_handler import ShippingMethodHandler
from application.services.checkout_deps import CheckoutDeps
from domain.cart import Address, CartItem, Customer, ShoppingCart
from domain.checkout import CheckoutContext, CheckoutRequest, CheckoutWorkflowResult
from domain.exceptions import ValidationError
from domain.ids import CustomerId, SessionId
from domain.routes import CHECKOUT_CONTROLLER, RouteIdentity
from domain.settings import CheckoutConfig
from infrastructure.cart.catalog_cart_validator import CatalogCartValidator
from infrastructure.cart.in_memory_cart_repository import InMemoryCartRepository
from infrastructure.config.settings_loader import CheckoutSettingsLoader
from infrastructure.events.in_memory_event_publisher import InMemoryEventPublisher
from infrastructure.logging.loguru_logger import LoguruLogger
from infrastructure.notifications.in_memory_notifier import InMemoryNotifier
from infrastructure.orders.in_memory_order_processing import InMemoryOrderProcessingService
from infrastructure.payments.configured_payment_service import (
    ConfiguredPaymentMethodProvider,
    ConfiguredPaymentService,
)
from infrastructure.session.in_memory_session_repository import InMemorySessionRepository
from infrastructure.shipping.configured_shipping_provider import ConfiguredShippingMethodProvider


class AddressModel(BaseModel):
    first_name: str
    last_name: str
    street: str
    city: str
    zip_code: str
    country_code: str
    email: Optional[str] = None

    def to_domain(self) -> Address:
        return Address(**self.model_dump())


class CartItemModel(BaseModel):
    sku: str
    name: str
    quantity: int = 1
    is_ship_enabled: bool = True


class CartRequest(BaseModel):
    """Replaces the customer's cart"""
    store_id: int = Field(default=1, description="Store identifier")
    is_registered: bool = Field(default=False, description="Customer is registered (not a guest)")
    billing_address: Optional[AddressModel] = None
    shipping_address: Optional[AddressModel] = None
    items: List[CartItemModel] = Field(default_factory=list)


class RouteModel(BaseModel):
    controller: str = Field(default=CHECKOUT_CONTROLLER)
    action: str = Field(description="Action of the page the request was made from")


class CheckoutSelections(BaseModel):
    """Values the customer submitted on the current checkout page"""
    billing_address: Optional[AddressModel] = None
    shipping_address: Optional[AddressModel] = None
    shipping_option: Optional[str] = None
    payment_method: Optional[str] = None


class CheckoutOperationRequest(BaseModel):
    customer_id: int = Field(description="Customer identifier")
    session_id: str = Field(description="Browser session identifier")
    route: RouteModel
    referrer: Optional[str] = Field(default=None, description="Referrer URL")
    form: Dict[str, str] = Field(default_factory=dict, description="Posted form fields")
    selections: Optional[CheckoutSelections] = None


class NavigationResponse(BaseModel):
    kind: str
    controller: Optional[str] = None
    action: Optional[str] = None
    route_values: Dict[str, Any] = Field(default_factory=dict)
    url: Optional[str] = None


class WorkflowErrorResponse(BaseModel):
    key: str
    message: str


class NotificationResponse(BaseModel):
    type: str
    message: str


class CheckoutOperationResponse(BaseModel):
    navigation: Optional[NavigationResponse] = None
    errors: List[WorkflowErrorResponse] = Field(default_factory=list)
    notifications: List[NotificationResponse] = Field(default_factory=list)


class PlacedOrderResponse(BaseModel):
    id: int
    order_guid: str
    payment_method_system_name: Optional[str]


app = FastAPI(
    title="Checkout Workflow",
    description="Step-sequenced storefront checkout",
    version="1.0.0",
)

CONFIG: CheckoutConfig = CheckoutSettingsLoader().load()
CART_REPOSITORY = InMemoryCartRepository()
SESSION_REPOSITORY = InMemorySessionRepository()
EVENT_PUBLISHER = InMemoryEventPublisher()
ORDER_PROCESSING = InMemoryOrderProcessingService(CONFIG.order)
PAYMENT_SERVICE = ConfiguredPaymentService(CONFIG.payment)


def _build_registry(config: CheckoutConfig) -> CheckoutHandlerRegistry:
    return CheckoutHandlerRegistry(
        [
            BillingAddressHandler(),
            ShippingAddressHandler(),
            ShippingMethodHandler(ConfiguredShippingMethodProvider(config.shipping), config.shipping),
            PaymentMethodHandler(ConfiguredPaymentMethodProvider(config.payment), config.payment),
        ]
    )


# built once, read-only afterwards
HANDLER_REGISTRY = _build_registry(CONFIG)

OPERATIONS: Dict[str, Callable[[CheckoutWorkflow, CheckoutContext], CheckoutWorkflowResult]] = {
    "start": CheckoutWorkflow.start,
    "process": CheckoutWorkflow.process,
    "advance": CheckoutWorkflow.advance,
    "complete": CheckoutWorkflow.complete,
}


@app.get("/")
def read_root():
    """Health check"""
    return {"status": "ok", "service": "checkout"}


def _build_workflow(notifier: InMemoryNotifier, logger: LoguruLogger) -> CheckoutWorkflow:
    deps = CheckoutDeps(
        cart_validator=CatalogCartValidator(CONFIG.catalog),
        event_publisher=EVENT_PUBLISHER,
        order_processing=ORDER_PROCESSING,
        payment_service=PAYMENT_SERVICE,
        notifier=notifier,
        unit_of_work=CART_REPOSITORY,
        logger=logger,
    )
    return CheckoutWorkflow(
        registry=HANDLER_REGISTRY,
        deps=deps,
        order_settings=CONFIG.order,
        cart_settings=CONFIG.shopping_cart,
    )


def _apply_selections(customer: Customer, selections: Optional[CheckoutSelections]) -> None:
    if selections is None:
        return
    if selections.billing_address is not None:
        customer.billing_address = selections.billing_address.to_domain()
    if selections.shipping_address is not None:
        customer.shipping_address = selections.shipping_address.to_domain()
    if selections.shipping_option is not None:
        customer.selected_shipping_option = selections.shipping_option
    if selections.payment_method is not None:
        customer.selected_payment_method = selections.payment_method


def _to_response(result: CheckoutWorkflowResult, notifier: InMemoryNotifier) -> CheckoutOperationResponse:
    navigation = None
    if result.navigation is not None:
        nav = result.navigation
        navigation = NavigationResponse(
            kind=nav.kind.value,
            controller=nav.controller,
            action=nav.action,
            route_values=dict(nav.route_values),
            url=nav.url,
        )
    return CheckoutOperationResponse(
        navigation=navigation,
        errors=[WorkflowErrorResponse(key=e.key, message=e.message) for e in result.errors],
        notifications=[
            NotificationResponse(type=n.type, message=n.message) for n in notifier.notifications
        ],
    )


@app.put("/carts/{customer_id}")
def put_cart(customer_id: int, request: CartRequest = Body(...)) -> Dict[str, Any]:
    try:
        CustomerId(customer_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    existing = CART_REPOSITORY.get(customer_id)
    customer = existing.customer if existing else Customer(id=customer_id)
    customer.is_registered = request.is_registered
    customer.billing_address = request.billing_address.to_domain() if request.billing_address else None
    customer.shipping_address = request.shipping_address.to_domain() if request.shipping_address else None

    cart = ShoppingCart(
        customer=customer,
        store_id=request.store_id,
        items=[CartItem(**item.model_dump()) for item in request.items],
    )
    CART_REPOSITORY.put(cart)
    CART_REPOSITORY.save_changes()
    return {"customer_id": customer_id, "items": len(cart.items)}


@app.post("/checkout/{operation}", response_model=CheckoutOperationResponse)
def run_checkout_operation(
    operation: str,
    request: CheckoutOperationRequest = Body(...),
) -> CheckoutOperationResponse:
    """
    Runs one checkout workflow operation for the given customer and session

    Args:
        operation: start | process | advance | complete
        request: current route, referrer, posted form and selections

    Returns:
        navigation target, errors and collected notifications
    """
    handler = OPERATIONS.get(operation)
    if handler is None:
        raise HTTPException(status_code=404, detail=f"Unknown checkout operation: {operation}")

    request_id = uuid4().hex
    logger = LoguruLogger().bind(request_id=request_id, operation=operation)

    try:
        session_id = SessionId(request.session_id)
        cart = CART_REPOSITORY.get(request.customer_id)
        if cart is None:
            raise HTTPException(status_code=404, detail=f"Cart not found: {request.customer_id}")

        _apply_selections(cart.customer, request.selections)

        context = CheckoutContext(
            cart=cart,
            request=CheckoutRequest(
                route=RouteIdentity(request.route.controller, request.route.action),
                referrer=request.referrer,
                form=dict(request.form),
                session=SESSION_REPOSITORY.get_or_create(session_id),
            ),
        )

        notifier = InMemoryNotifier()
        workflow = _build_workflow(notifier, logger)
        result = handler(workflow, context)
        return _to_response(result, notifier)

    except HTTPException:
        raise
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CheckoutConfigurationError as e:
        logger.error("checkout.configuration_error", error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/customers/{customer_id}/orders", response_model=List[PlacedOrderResponse])
def list_customer_orders(customer_id: int) -> List[PlacedOrderResponse]:
    return [
        PlacedOrderResponse(
            id=order.id,
            order_guid=order.order_guid,
            payment_method_system_name=order.payment_method_system_name,
        )
        for order in ORDER_PROCESSING.orders
        if order.customer_id == customer_id
    ]
