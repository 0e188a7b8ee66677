"""Per-line charge arithmetic.

Amounts are carried at full float precision; rounding to two decimals only
happens when a report is rendered.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from freightdesk.app.core.errors import ValidationError

DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class ChargeLine:
    description: str
    quantity: float
    sale_rate: float
    cost_rate: float
    vat_percent: float
    currency: str = DEFAULT_CURRENCY


@dataclass(frozen=True)
class ChargeAmounts:
    sale_amount: float = 0.0
    cost_amount: float = 0.0
    vat_sale: float = 0.0
    vat_cost: float = 0.0
    total_sale: float = 0.0
    total_cost: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            "sale_amount": self.sale_amount,
            "cost_amount": self.cost_amount,
            "vat_sale": self.vat_sale,
            "vat_cost": self.vat_cost,
            "total_sale": self.total_sale,
            "total_cost": self.total_cost,
        }


AMOUNT_FIELDS: tuple[str, ...] = tuple(ChargeAmounts().as_dict())


def calculate_charge(
    quantity: float,
    sale_rate: float,
    cost_rate: float,
    vat_percent: float,
) -> ChargeAmounts:
    """Derive sale, cost, VAT and total amounts for one charge line."""
    for field, value in (
        ("quantity", quantity),
        ("sale_rate", sale_rate),
        ("cost_rate", cost_rate),
        ("vat_percent", vat_percent),
    ):
        if not math.isfinite(value):
            raise ValidationError(field, "must be a finite number")
        if value < 0:
            raise ValidationError(field, "must not be negative")

    sale_amount = quantity * sale_rate
    cost_amount = quantity * cost_rate
    vat_sale = sale_amount * vat_percent / 100
    vat_cost = cost_amount * vat_percent / 100

    return ChargeAmounts(
        sale_amount=sale_amount,
        cost_amount=cost_amount,
        vat_sale=vat_sale,
        vat_cost=vat_cost,
        total_sale=sale_amount + vat_sale,
        total_cost=cost_amount + vat_cost,
    )


def calculate_line(line: ChargeLine) -> ChargeAmounts:
    return calculate_charge(line.quantity, line.sale_rate, line.cost_rate, line.vat_percent)
