"""Request/response schemas for orders and their charge lines."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from freightdesk.app.services.charges import DEFAULT_CURRENCY
from freightdesk.app.services.currency import normalize_currency


# ─── Request ──────────────────────────────────────────────────────────────────


class ChargeCreate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    description: str
    quantity: float
    sale_rate: float = Field(0.0, ge=0)
    cost_rate: float = Field(0.0, ge=0)
    vat_percent: float = Field(0.0, ge=0)
    currency: str = DEFAULT_CURRENCY

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Description is required")
        return v.strip()

    @field_validator("quantity")
    @classmethod
    def quantity_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Quantity must be greater than zero")
        return v

    @field_validator("currency")
    @classmethod
    def currency_code(cls, v: str) -> str:
        return normalize_currency(v)


class OrderCreate(BaseModel):
    customer_id: UUID
    order_number: str
    order_date: date
    execution_date: date | None = None
    charges: list[ChargeCreate] = []

    @field_validator("order_number")
    @classmethod
    def order_number_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Order number is required")
        return v.strip()


class OrderUpdate(BaseModel):
    """Partial header update.

    ``charges``, when present, is the complete new charge list: existing
    lines are deleted and these are created in their place.
    """

    customer_id: UUID | None = None
    order_number: str | None = None
    order_date: date | None = None
    execution_date: date | None = None
    charges: list[ChargeCreate] | None = None

    @field_validator("order_number")
    @classmethod
    def order_number_not_empty(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Order number is required")
        return v.strip() if v is not None else v


# ─── Response ─────────────────────────────────────────────────────────────────


class ChargeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    description: str
    quantity: float
    sale_rate: float
    cost_rate: float
    vat_percent: float
    currency: str
    sale_amount: float
    cost_amount: float
    vat_sale: float
    vat_cost: float
    total_sale: float
    total_cost: float


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    order_number: str
    customer_id: UUID
    customer_name: str
    order_date: date
    execution_date: date | None
    created_at: datetime | None = None
    charges: list[ChargeOut]


class OrderListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    order_number: str
    customer_name: str
    order_date: date
    execution_date: date | None


class OrderListResponse(BaseModel):
    items: list[OrderListItem]
    total: int
    page: int
    page_size: int
