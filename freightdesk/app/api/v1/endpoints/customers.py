from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from freightdesk.app.api.deps import get_customer_service
from freightdesk.app.api.errors import http_error
from freightdesk.app.core.config import settings
from freightdesk.app.core.errors import ConflictError, NotFoundError
from freightdesk.app.models.customer import Customer
from freightdesk.app.schemas.customer import (
    CustomerCreate,
    CustomerListItem,
    CustomerListResponse,
    CustomerOut,
    CustomerUpdate,
)
from freightdesk.app.services.customers import CustomerService

router = APIRouter()


@router.get("/", response_model=CustomerListResponse)
def list_customers(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    q: str | None = Query(None, description="Search by name or code"),
    service: CustomerService = Depends(get_customer_service),
) -> CustomerListResponse:
    customers, total = service.list_customers(page, page_size, q)
    return CustomerListResponse(
        items=[CustomerListItem.model_validate(c) for c in customers],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("/", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
) -> Customer:
    try:
        return service.create_customer(payload)
    except ConflictError as e:
        raise http_error(e)


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(
    customer_id: UUID,
    service: CustomerService = Depends(get_customer_service),
) -> Customer:
    try:
        return service.get_customer(customer_id)
    except NotFoundError as e:
        raise http_error(e)


@router.put("/{customer_id}", response_model=CustomerOut)
def update_customer(
    customer_id: UUID,
    payload: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
) -> Customer:
    """Update a customer. Supplied ``addresses``/``contacts`` replace the stored lists."""
    try:
        return service.update_customer(customer_id, payload)
    except (NotFoundError, ConflictError) as e:
        raise http_error(e)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: UUID,
    service: CustomerService = Depends(get_customer_service),
) -> Response:
    try:
        service.delete_customer(customer_id)
    except NotFoundError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
