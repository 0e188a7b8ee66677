"""Pydantic response schemas for the order summary report."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class OrderSummaryRowOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_number: str
    execution_date: str
    customer_name: str
    sale_amount: float
    cost_amount: float
    total_sale: float
    total_cost: float
    vat_sale: float
    vat_cost: float
    net_amount: float
    unconverted_currencies: list[str] = []


class OrderSummaryTotalsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sale_amount: float
    cost_amount: float
    total_sale: float
    total_cost: float
    vat_sale: float
    vat_cost: float
    net_amount: float


class OrderSummaryResponse(BaseModel):
    currency: str
    ordering: str
    start_date: str | None
    end_date: str | None
    rows: list[OrderSummaryRowOut]
    totals: OrderSummaryTotalsOut
