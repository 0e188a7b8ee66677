"""XML export of the order summary report."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from lxml import etree
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

if TYPE_CHECKING:
    from freightdesk.app.services.order_summary import OrderSummary

ROOT_TAG = "OrderSummary"
ROW_TAG = "Order"

# (element, row attribute)
TEXT_ELEMENTS: list[tuple[str, str]] = [
    ("OrderNumber", "order_number"),
    ("ExecutionDate", "execution_date"),
    ("CustomerName", "customer_name"),
]
AMOUNT_ELEMENTS: list[tuple[str, str]] = [
    ("TotalSale", "total_sale"),
    ("TotalCost", "total_cost"),
    ("VatSale", "vat_sale"),
    ("VatCost", "vat_cost"),
    ("NetAmount", "net_amount"),
]


def format_amount(value: float) -> str:
    """Two-decimal plain text; never ``-0.00``."""
    return f"{round(value, 2) + 0.0:.2f}"


def _text(parent: etree._Element, tag: str, value: str) -> None:
    el = etree.SubElement(parent, tag)
    # XML 1.0 has no representation for most C0 control characters.
    value = ILLEGAL_CHARACTERS_RE.sub("", value)
    # A CDATA section cannot contain its own terminator; plain text is escaped instead.
    el.text = etree.CDATA(value) if "]]>" not in value else value


def export_order_summary_xml(summary: OrderSummary) -> io.BytesIO:
    root = etree.Element(ROOT_TAG, currency=summary.currency)
    for row in summary.rows:
        order_el = etree.SubElement(root, ROW_TAG)
        for tag, attr in TEXT_ELEMENTS:
            _text(order_el, tag, getattr(row, attr) or "")
        for tag, attr in AMOUNT_ELEMENTS:
            etree.SubElement(order_el, tag).text = format_amount(getattr(row, attr))

    xml_bytes = etree.tostring(
        root, xml_declaration=True, encoding="UTF-8", pretty_print=True,
    )
    return io.BytesIO(xml_bytes)
