"""FastAPI endpoints for the Marketplace.

The acting account arrives in the ``X-Account-Id`` header; resolving a
session to that id is the job of the gateway in front of this service.
"""

from fastapi import APIRouter, FastAPI, Header, Request
from fastapi.responses import JSONResponse

from marketplace import workflows
from marketplace.api.schemas import (
    AccountResponse,
    AddProductRequest,
    AddToCartRequest,
    ApprovalResponse,
    CartEntryResponse,
    CartResponse,
    ChangePriceRequest,
    ErrorResponse,
    OrderResponse,
    PendingRegistrationResponse,
    PlaceOrderRequest,
    ProductResponse,
    RegisterAccountRequest,
    ReviewRegistrationRequest,
    UpdateStatusRequest,
)
from marketplace.errors import (
    AlreadyExists,
    Forbidden,
    InsufficientStock,
    InvalidInput,
    InvalidTransition,
    MarketplaceError,
    NotFound,
    StorageConflict,
    Unauthenticated,
)
from marketplace.workflows.catalogue import describe_products
from marketplace.workflows.orders import describe_orders

ERROR_RESPONSES = {status: {"model": ErrorResponse} for status in (400, 401, 403, 404, 409, 503)}

account_router = APIRouter(prefix="/accounts", tags=["accounts"], responses=ERROR_RESPONSES)
product_router = APIRouter(prefix="/products", tags=["products"], responses=ERROR_RESPONSES)
cart_router = APIRouter(prefix="/cart", tags=["cart"], responses=ERROR_RESPONSES)
order_router = APIRouter(prefix="/orders", tags=["orders"], responses=ERROR_RESPONSES)
buyer_router = APIRouter(prefix="/buyer", tags=["buyer"], responses=ERROR_RESPONSES)
seller_router = APIRouter(prefix="/seller", tags=["seller"], responses=ERROR_RESPONSES)
authorizer_router = APIRouter(prefix="/authorizer", tags=["authorizer"], responses=ERROR_RESPONSES)

routers = [
    account_router,
    product_router,
    cart_router,
    order_router,
    buyer_router,
    seller_router,
    authorizer_router,
]

_STATUS_CODES = {
    Unauthenticated: 401,
    Forbidden: 403,
    NotFound: 404,
    InvalidInput: 400,
    AlreadyExists: 409,
    InsufficientStock: 409,
    InvalidTransition: 409,
    StorageConflict: 503,
}


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    status_code = next((code for cls, code in _STATUS_CODES.items() if isinstance(exc, cls)), 500)
    headers = {"Retry-After": "1"} if exc.retryable else None
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)


def _order(order) -> OrderResponse:
    return OrderResponse(**describe_orders([order])[0])


# --- Account endpoints ---


@account_router.post("", status_code=201, response_model=AccountResponse)
async def register_account(body: RegisterAccountRequest) -> AccountResponse:
    account = workflows.register_account(body.username, body.email, body.role)
    return AccountResponse(id=str(account.id), username=account.username, email=account.email, role=account.role)


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def browse_products(limit: int = 100, offset: int = 0) -> list[ProductResponse]:
    return [ProductResponse(**view) for view in workflows.browse_products(limit=limit, offset=offset)]


@product_router.post("", status_code=201, response_model=ProductResponse)
async def add_product(body: AddProductRequest, x_account_id: str | None = Header(default=None)) -> ProductResponse:
    product = workflows.add_product(
        x_account_id,
        name=body.name,
        price=body.price,
        stock=body.stock,
        category_id=body.category_id,
        image_urls=body.image_urls,
    )
    return ProductResponse(**describe_products([product])[0])


@product_router.put("/{product_id}/price", response_model=ProductResponse)
async def change_product_price(
    product_id: str,
    body: ChangePriceRequest,
    x_account_id: str | None = Header(default=None),
) -> ProductResponse:
    product = workflows.change_product_price(x_account_id, product_id, body.price)
    return ProductResponse(**describe_products([product])[0])


@product_router.delete("/{product_id}", response_model=ProductResponse)
async def remove_product(product_id: str, x_account_id: str | None = Header(default=None)) -> ProductResponse:
    product = workflows.remove_product(x_account_id, product_id)
    return ProductResponse(**describe_products([product])[0])


# --- Cart endpoints ---


@cart_router.post("", status_code=201, response_model=CartEntryResponse)
async def add_to_cart(body: AddToCartRequest, x_account_id: str | None = Header(default=None)) -> CartEntryResponse:
    entry = workflows.add_to_cart(x_account_id, body.product_id, body.quantity)
    return CartEntryResponse(id=str(entry.id), product_id=str(entry.product_id), quantity=entry.quantity)


@cart_router.get("", response_model=CartResponse)
async def view_cart(x_account_id: str | None = Header(default=None)) -> CartResponse:
    return CartResponse(**workflows.view_cart(x_account_id))


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, x_account_id: str | None = Header(default=None)) -> OrderResponse:
    order = workflows.place_order(
        x_account_id,
        body.product_id,
        quantity=body.quantity,
        address=body.address,
        payment_method=body.payment_method,
    )
    return _order(order)


@buyer_router.get("/orders", response_model=list[OrderResponse])
async def buyer_orders(x_account_id: str | None = Header(default=None)) -> list[OrderResponse]:
    return [OrderResponse(**view) for view in workflows.buyer_orders(x_account_id)]


@buyer_router.post("/orders/{order_id}/cancel", response_model=OrderResponse)
async def buyer_cancel(order_id: str, x_account_id: str | None = Header(default=None)) -> OrderResponse:
    return _order(workflows.buyer_cancel(x_account_id, order_id))


@seller_router.get("/orders", response_model=list[OrderResponse])
async def seller_orders(x_account_id: str | None = Header(default=None)) -> list[OrderResponse]:
    return [OrderResponse(**view) for view in workflows.seller_orders(x_account_id)]


@seller_router.patch("/orders/{order_id}/status", response_model=OrderResponse)
async def seller_update_status(
    order_id: str,
    body: UpdateStatusRequest,
    x_account_id: str | None = Header(default=None),
) -> OrderResponse:
    return _order(workflows.seller_update_status(x_account_id, order_id, body.status))


@seller_router.post("/orders/{order_id}/cancel", response_model=OrderResponse)
async def seller_cancel(order_id: str, x_account_id: str | None = Header(default=None)) -> OrderResponse:
    return _order(workflows.seller_cancel(x_account_id, order_id))


# --- Authorizer endpoints ---


@authorizer_router.get("/orders", response_model=list[OrderResponse])
async def all_orders(
    limit: int = 100,
    offset: int = 0,
    x_account_id: str | None = Header(default=None),
) -> list[OrderResponse]:
    return [OrderResponse(**view) for view in workflows.all_orders(x_account_id, limit=limit, offset=offset)]


@authorizer_router.get("/registrations", response_model=list[PendingRegistrationResponse])
async def pending_registrations(x_account_id: str | None = Header(default=None)) -> list[PendingRegistrationResponse]:
    return [PendingRegistrationResponse(**view) for view in workflows.pending_registrations(x_account_id)]


@authorizer_router.post("/registrations/{seller_id}/review", response_model=ApprovalResponse)
async def review_registration(
    seller_id: str,
    body: ReviewRegistrationRequest,
    x_account_id: str | None = Header(default=None),
) -> ApprovalResponse:
    approval = workflows.review_seller_registration(x_account_id, seller_id, body.decision)
    return ApprovalResponse(
        seller_id=str(approval.account_id),
        status=approval.status,
        reviewer_id=str(approval.reviewer_id) if approval.reviewer_id else None,
    )
