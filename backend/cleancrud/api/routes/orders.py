"""Orders Controller — HTTP verbs mapped to order requests.

Invariants:
    - Every endpoint needs a token; the owner is always the caller
    - Other users' orders answer 404, never 403
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from cleancrud.api.dependencies import get_current_user, get_mediator, unwrap
from cleancrud.config import get_settings
from cleancrud.schemas.auth import CurrentUser
from cleancrud.schemas.common import MAX_PAGE, MAX_PAGE_SIZE, PagedResponse
from cleancrud.schemas.orders import (
    AddOrderItemRequest, AddOrderRequest, CancelOrderRequest, GetOrderRequest,
    ListOrdersRequest, NewOrder, OrderItemInput, OrderResponse, RemoveOrderItemRequest,
)
from cleancrud.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/orders", tags=["orders"])
_settings = get_settings()


@router.post(
    "", response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_order(
    body: NewOrder,
    current: CurrentUser = Depends(get_current_user),
    mediator: Mediator = Depends(get_mediator),
):
    """Place a new pending order for the caller."""
    return unwrap(await mediator.send(
        AddOrderRequest(user_id=current.id, **body.model_dump()),
    ))


@router.get("", response_model=PagedResponse[OrderResponse])
async def list_orders(
    page: int = Query(1, ge=1, le=MAX_PAGE),
    page_size: int = Query(_settings.default_page_size, ge=1, le=MAX_PAGE_SIZE),
    current: CurrentUser = Depends(get_current_user),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(
        ListOrdersRequest(user_id=current.id, page=page, page_size=page_size),
    ))


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(
        GetOrderRequest(id=order_id, user_id=current.id),
    ))


@router.post(
    "/{order_id}/items", response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_order_item(
    order_id: UUID,
    body: OrderItemInput,
    current: CurrentUser = Depends(get_current_user),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(
        AddOrderItemRequest(order_id=order_id, user_id=current.id, **body.model_dump()),
    ))


@router.delete("/{order_id}/items/{item_id}", response_model=OrderResponse)
async def remove_order_item(
    order_id: UUID,
    item_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(
        RemoveOrderItemRequest(order_id=order_id, item_id=item_id, user_id=current.id),
    ))


@router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(
        CancelOrderRequest(order_id=order_id, user_id=current.id),
    ))
