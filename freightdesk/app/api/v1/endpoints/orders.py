from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from freightdesk.app.api.deps import get_order_service
from freightdesk.app.api.errors import http_error
from freightdesk.app.core.config import settings
from freightdesk.app.core.errors import ConflictError, NotFoundError, ValidationError
from freightdesk.app.models.order import Order
from freightdesk.app.schemas.order import (
    OrderCreate,
    OrderListItem,
    OrderListResponse,
    OrderOut,
    OrderUpdate,
)
from freightdesk.app.services.orders import OrderService

router = APIRouter()


@router.get("/", response_model=OrderListResponse)
def list_orders(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: str | None = Query(None, description="Order number or customer name"),
    service: OrderService = Depends(get_order_service),
) -> OrderListResponse:
    orders, total = service.list_orders(page, page_size, search)
    return OrderListResponse(
        items=[OrderListItem.model_validate(o) for o in orders],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("/", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    service: OrderService = Depends(get_order_service),
) -> Order:
    try:
        return service.create_order(payload)
    except (NotFoundError, ConflictError, ValidationError) as e:
        raise http_error(e)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: UUID,
    service: OrderService = Depends(get_order_service),
) -> Order:
    try:
        return service.get_order(order_id)
    except NotFoundError as e:
        raise http_error(e)


@router.put("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: UUID,
    payload: OrderUpdate,
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Update an order. A supplied ``charges`` list replaces every existing line."""
    try:
        return service.update_order(order_id, payload)
    except (NotFoundError, ConflictError, ValidationError) as e:
        raise http_error(e)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(
    order_id: UUID,
    service: OrderService = Depends(get_order_service),
) -> Response:
    try:
        service.delete_order(order_id)
    except NotFoundError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
