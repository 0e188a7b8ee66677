"""Excel export of the order summary report using openpyxl."""
from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from freightdesk.app.services.export_i18n import t

if TYPE_CHECKING:
    from freightdesk.app.services.order_summary import OrderSummary

# ── Shared styling constants ────────────────────────────────────────────────

_HEADER_FONT = Font(name="Calibri", bold=True, color="FFFFFF", size=11)
_HEADER_FILL = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
_CURRENCY_FMT = "#,##0.00"
_RIGHT = Alignment(horizontal="right")
_LEFT = Alignment(horizontal="left")

# (label key, row attribute, is money)
ORDER_SUMMARY_COLUMNS: list[tuple[str, str, bool]] = [
    ("order_number", "order_number", False),
    ("execution_date", "execution_date", False),
    ("customer", "customer_name", False),
    ("total_sale", "total_sale", True),
    ("total_cost", "total_cost", True),
    ("vat_sale", "vat_sale", True),
    ("vat_cost", "vat_cost", True),
    ("net_amount", "net_amount", True),
]


def _auto_width(ws: Any) -> None:
    """Auto-fit column widths based on content."""
    for col_idx in range(1, ws.max_column + 1):
        max_len = 0
        col_letter = get_column_letter(col_idx)
        for row in ws.iter_rows(min_col=col_idx, max_col=col_idx, values_only=False):
            cell = row[0]
            if cell.value is not None:
                max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max(max_len + 4, 15), 40)


def _write_header_row(ws: Any, row: int, values: list[str], money_from: int) -> None:
    """Write a styled header row; money columns are right-aligned."""
    for col, val in enumerate(values, 1):
        cell = ws.cell(row=row, column=col, value=val)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _RIGHT if col >= money_from else _LEFT


def _to_workbook(ws: Any, wb: Workbook) -> io.BytesIO:
    """Finalize workbook and return as BytesIO."""
    _auto_width(ws)
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf


def export_order_summary_excel(summary: OrderSummary, lang: str = "en") -> io.BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = t(lang, "order_summary")

    first_money = next(i for i, (_, _, money) in enumerate(ORDER_SUMMARY_COLUMNS, 1) if money)
    _write_header_row(ws, 1, [t(lang, key) for key, _, _ in ORDER_SUMMARY_COLUMNS], first_money)
    ws.freeze_panes = "A2"

    for row_idx, summary_row in enumerate(summary.rows, 2):
        for col, (_, attr, money) in enumerate(ORDER_SUMMARY_COLUMNS, 1):
            value = getattr(summary_row, attr)
            if isinstance(value, str):
                value = ILLEGAL_CHARACTERS_RE.sub("", value)
            c = ws.cell(row=row_idx, column=col, value=float(value) if money else value)
            if money:
                c.number_format = _CURRENCY_FMT
                c.alignment = _RIGHT

    return _to_workbook(ws, wb)
