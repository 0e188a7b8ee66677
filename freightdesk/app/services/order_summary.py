"""Order summary report: fetch, aggregate, order and render.

The builder is handed its order source at construction time and keeps no
state between calls, so one instance can serve concurrent requests.
"""

from __future__ import annotations

import enum
import io
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from freightdesk.app.core.errors import (
    FreightDeskError,
    RenderError,
    ReportGenerationError,
    ValidationError,
)
from freightdesk.app.repositories.orders import OrderSource
from freightdesk.app.services.aggregation import OrderSummaryRow, summarize_orders
from freightdesk.app.services.currency import REPORT_CURRENCIES, normalize_currency
from freightdesk.app.services.export_excel import export_order_summary_excel
from freightdesk.app.services.export_xml import export_order_summary_xml

logger = logging.getLogger(__name__)

TOTAL_FIELDS: tuple[str, ...] = (
    "sale_amount",
    "cost_amount",
    "total_sale",
    "total_cost",
    "vat_sale",
    "vat_cost",
    "net_amount",
)


class SummaryOrdering(str, enum.Enum):
    # Most recent execution first, undated orders last, ties by order number.
    EXECUTION_DATE_DESC = "execution_date_desc"
    ORDER_NUMBER_ASC = "order_number_asc"


@dataclass(frozen=True)
class OrderSummaryTotals:
    sale_amount: float = 0.0
    cost_amount: float = 0.0
    total_sale: float = 0.0
    total_cost: float = 0.0
    vat_sale: float = 0.0
    vat_cost: float = 0.0
    net_amount: float = 0.0


@dataclass(frozen=True)
class OrderSummary:
    currency: str
    ordering: SummaryOrdering
    start_date: date | None
    end_date: date | None
    rows: list[OrderSummaryRow]


@dataclass(frozen=True)
class OrderSummaryTable:
    summary: OrderSummary
    totals: OrderSummaryTotals


# ── Helpers ──────────────────────────────────────────────────────────────────


def resolve_ordering(
    start_date: date | None,
    end_date: date | None,
    ordering: SummaryOrdering | None = None,
) -> SummaryOrdering:
    """Explicit ordering wins; otherwise filtered reports go by order number."""
    if ordering is not None:
        return SummaryOrdering(ordering)
    if start_date is not None and end_date is not None:
        return SummaryOrdering.ORDER_NUMBER_ASC
    return SummaryOrdering.EXECUTION_DATE_DESC


def sort_rows(rows: list[OrderSummaryRow], ordering: SummaryOrdering) -> list[OrderSummaryRow]:
    by_number = sorted(rows, key=lambda r: r.order_number)
    if ordering is SummaryOrdering.ORDER_NUMBER_ASC:
        return by_number
    dated = [r for r in by_number if r.execution_date]
    undated = [r for r in by_number if not r.execution_date]
    # list.sort is stable with reverse=True, so order-number ties keep ascending order.
    dated.sort(key=lambda r: r.execution_date, reverse=True)
    return dated + undated


def grand_total(rows: list[OrderSummaryRow]) -> OrderSummaryTotals:
    """Column-wise sum of every numeric field; all zeros for no rows."""
    sums = dict.fromkeys(TOTAL_FIELDS, 0.0)
    for row in rows:
        for name in TOTAL_FIELDS:
            sums[name] += getattr(row, name)
    return OrderSummaryTotals(**sums)


def _check_range(start_date: date | None, end_date: date | None) -> None:
    if start_date is not None and end_date is not None and start_date > end_date:
        raise ValidationError("start_date", "must not be after end_date")


def _check_target(currency: str) -> str:
    target = normalize_currency(currency)
    if target not in REPORT_CURRENCIES:
        raise ValidationError(
            "currency", f"Report currency must be one of: {', '.join(REPORT_CURRENCIES)}",
        )
    return target


# ── Builder ──────────────────────────────────────────────────────────────────


class OrderSummaryReportBuilder:
    def __init__(self, source: OrderSource) -> None:
        self.source = source

    def get_summary(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        target_currency: str = "USD",
        ordering: SummaryOrdering | None = None,
    ) -> OrderSummary:
        _check_range(start_date, end_date)
        target = _check_target(target_currency)
        resolved = resolve_ordering(start_date, end_date, ordering)

        try:
            orders = self.source.fetch_orders_in_range(start_date, end_date)
        except Exception as exc:
            logger.exception("Order retrieval failed for %s..%s", start_date, end_date)
            raise ReportGenerationError("Failed to fetch orders for report") from exc

        # The range filter is re-applied here so any source gets the same contract.
        if start_date is not None and end_date is not None:
            orders = [
                o for o in orders
                if o.execution_date is not None and start_date <= o.execution_date <= end_date
            ]

        rows = sort_rows(summarize_orders(orders, target), resolved)
        logger.info(
            "Order summary built: %d rows in %s (%s)", len(rows), target, resolved.value,
        )
        return OrderSummary(
            currency=target,
            ordering=resolved,
            start_date=start_date,
            end_date=end_date,
            rows=rows,
        )

    def build_table(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        target_currency: str = "USD",
        ordering: SummaryOrdering | None = None,
    ) -> OrderSummaryTable:
        summary = self.get_summary(start_date, end_date, target_currency, ordering)
        return OrderSummaryTable(summary=summary, totals=grand_total(summary.rows))

    def export_excel(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        target_currency: str = "USD",
        ordering: SummaryOrdering | None = None,
        lang: str = "en",
    ) -> io.BytesIO:
        summary = self.get_summary(start_date, end_date, target_currency, ordering)
        return _render("excel", lambda: export_order_summary_excel(summary, lang=lang))

    def export_xml(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        target_currency: str = "USD",
        ordering: SummaryOrdering | None = None,
    ) -> io.BytesIO:
        summary = self.get_summary(start_date, end_date, target_currency, ordering)
        return _render("xml", lambda: export_order_summary_xml(summary))


def _render(fmt: str, produce: Callable[[], io.BytesIO]) -> io.BytesIO:
    try:
        buf = produce()
    except FreightDeskError:
        raise
    except Exception as exc:
        logger.exception("Rendering order summary as %s failed", fmt)
        raise RenderError(fmt, str(exc)) from exc
    logger.info("Order summary exported as %s (%d bytes)", fmt, buf.getbuffer().nbytes)
    return buf

