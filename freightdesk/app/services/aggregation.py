"""Per-order aggregation of charge lines into one summary row."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from freightdesk.app.services.charges import AMOUNT_FIELDS, ChargeLine, calculate_line
from freightdesk.app.services.currency import convert, is_convertible, normalize_currency

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderSnapshot:
    """What the order collaborator hands to the report engine."""

    order_number: str
    customer_name: str
    execution_date: date | None = None
    charges: tuple[ChargeLine, ...] = ()


@dataclass(frozen=True)
class OrderSummaryRow:
    order_number: str
    execution_date: str
    customer_name: str
    sale_amount: float = 0.0
    cost_amount: float = 0.0
    vat_sale: float = 0.0
    vat_cost: float = 0.0
    total_sale: float = 0.0
    total_cost: float = 0.0
    net_amount: float = 0.0
    currency: str = "USD"
    unconverted_currencies: tuple[str, ...] = field(default=())


def summarize_order(order: OrderSnapshot, target_currency: str) -> OrderSummaryRow:
    """Sum every charge of ``order`` in ``target_currency``.

    Each line is converted from its own currency before summing. The net
    amount is taken once from the summed totals, never per line.
    """
    target = normalize_currency(target_currency)
    totals = dict.fromkeys(AMOUNT_FIELDS, 0.0)
    unconverted: set[str] = set()

    for line in order.charges:
        source = normalize_currency(line.currency)
        amounts = calculate_line(line).as_dict()
        if is_convertible(source, target):
            for name in AMOUNT_FIELDS:
                totals[name] += convert(amounts[name], source, target)
        else:
            unconverted.add(source)
            for name in AMOUNT_FIELDS:
                totals[name] += amounts[name]

    if unconverted:
        logger.warning(
            "Order %s has charges in %s summed unconverted into %s",
            order.order_number,
            ", ".join(sorted(unconverted)),
            target,
        )

    return OrderSummaryRow(
        order_number=order.order_number,
        execution_date=order.execution_date.isoformat() if order.execution_date else "",
        customer_name=order.customer_name,
        net_amount=totals["total_sale"] - totals["total_cost"],
        currency=target,
        unconverted_currencies=tuple(sorted(unconverted)),
        **totals,
    )


def summarize_orders(
    orders: Iterable[OrderSnapshot], target_currency: str,
) -> list[OrderSummaryRow]:
    return [summarize_order(o, target_currency) for o in orders]
