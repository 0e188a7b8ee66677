"""Tests for the spreadsheet and XML renderers."""
from __future__ import annotations

from datetime import date

import pytest
from lxml import etree
from openpyxl import load_workbook

from freightdesk.app.core.errors import RenderError
from freightdesk.app.services import order_summary
from freightdesk.app.services.export_xml import format_amount
from freightdesk.app.services.order_summary import OrderSummaryReportBuilder
from freightdesk.tests.conftest import StaticOrderSource, charge, snapshot


@pytest.fixture()
def builder() -> OrderSummaryReportBuilder:
    return OrderSummaryReportBuilder(StaticOrderSource([
        snapshot("ORD-001", date(2024, 6, 1)),
        snapshot(
            "ORD-002",
            None,
            [charge(quantity=1000, sale_rate=1234.5, cost_rate=1000, vat_percent=5)],
            customer_name="Smith & Sons <Freight>",
        ),
    ]))


# ── Excel ────────────────────────────────────────────────────────────────


class TestExcel:
    def test_returns_xlsx_buffer(self, builder: OrderSummaryReportBuilder) -> None:
        buf = builder.export_excel()
        # XLSX files are ZIP archives starting with PK
        assert buf.getvalue()[:2] == b"PK"

    def test_header_and_rows(self, builder: OrderSummaryReportBuilder) -> None:
        ws = load_workbook(builder.export_excel()).active

        header = [c.value for c in ws[1]]
        assert header == [
            "Order Number", "Execution Date", "Customer", "Total Sales",
            "Total Cost", "Sales VAT", "Cost VAT", "Net Amount",
        ]
        assert all(c.font.bold for c in ws[1])
        assert ws.max_row == 3

        first = [c.value for c in ws[2]]
        assert first[:3] == ["ORD-001", "2024-06-01", "Global Logistics Ltd"]
        assert first[3:] == pytest.approx([210, 168, 10, 8, 42])

    def test_financial_columns_use_two_decimals_with_separators(
        self, builder: OrderSummaryReportBuilder,
    ) -> None:
        ws = load_workbook(builder.export_excel()).active
        for row in (2, 3):
            for col in range(4, 9):
                assert ws.cell(row=row, column=col).number_format == "#,##0.00"

    def test_undated_order_has_empty_date(self, builder: OrderSummaryReportBuilder) -> None:
        ws = load_workbook(builder.export_excel()).active
        assert ws.cell(row=3, column=1).value == "ORD-002"
        assert ws.cell(row=3, column=2).value in ("", None)

    def test_arabic_headers(self, builder: OrderSummaryReportBuilder) -> None:
        ws = load_workbook(builder.export_excel(lang="ar")).active
        assert ws.cell(row=1, column=1).value == "رقم الطلب"

    def test_empty_report_has_only_header(self) -> None:
        ws = load_workbook(OrderSummaryReportBuilder(StaticOrderSource([])).export_excel()).active
        assert ws.max_row == 1


# ── XML ──────────────────────────────────────────────────────────────────


class TestXml:
    def test_document_structure(self, builder: OrderSummaryReportBuilder) -> None:
        raw = builder.export_xml().getvalue()
        assert raw.startswith(b"<?xml")
        assert b"UTF-8" in raw.splitlines()[0]

        root = etree.fromstring(raw)
        assert root.tag == "OrderSummary"
        assert root.get("currency") == "USD"
        orders = root.findall("Order")
        assert len(orders) == 2
        assert [child.tag for child in orders[0]] == [
            "OrderNumber", "ExecutionDate", "CustomerName",
            "TotalSale", "TotalCost", "VatSale", "VatCost", "NetAmount",
        ]

    def test_amounts_are_two_decimal_text(self, builder: OrderSummaryReportBuilder) -> None:
        root = etree.fromstring(builder.export_xml().getvalue())
        first = root.find("Order")
        assert first.findtext("TotalSale") == "210.00"
        assert first.findtext("TotalCost") == "168.00"
        assert first.findtext("VatSale") == "10.00"
        assert first.findtext("NetAmount") == "42.00"

    def test_special_characters_survive(self, builder: OrderSummaryReportBuilder) -> None:
        raw = builder.export_xml().getvalue()
        assert b"<![CDATA[Smith & Sons <Freight>]]>" in raw

        root = etree.fromstring(raw)
        second = root.findall("Order")[1]
        assert second.findtext("CustomerName") == "Smith & Sons <Freight>"
        assert second.findtext("ExecutionDate") == ""

    def test_cdata_terminator_in_text(self) -> None:
        builder = OrderSummaryReportBuilder(StaticOrderSource([
            snapshot("ORD-]]>-1", date(2024, 1, 1)),
        ]))
        root = etree.fromstring(builder.export_xml().getvalue())
        assert root.find("Order").findtext("OrderNumber") == "ORD-]]>-1"

    def test_format_amount(self) -> None:
        assert format_amount(42) == "42.00"
        assert format_amount(1234567.891) == "1234567.89"
        assert format_amount(-1e-12) == "0.00"


# ── Control characters ───────────────────────────────────────────────────


@pytest.fixture()
def control_char_builder() -> OrderSummaryReportBuilder:
    return OrderSummaryReportBuilder(StaticOrderSource([
        snapshot("ORD-\x00-1", date(2024, 6, 1), customer_name="Acme\x0bFreight\x1f"),
        snapshot("ORD-2", date(2024, 5, 1), customer_name="Tab\tand\nnewline"),
    ]))


def test_control_characters_dropped_from_xml(
    control_char_builder: OrderSummaryReportBuilder,
) -> None:
    root = etree.fromstring(control_char_builder.export_xml().getvalue())
    orders = root.findall("Order")
    assert orders[0].findtext("OrderNumber") == "ORD--1"
    assert orders[0].findtext("CustomerName") == "AcmeFreight"
    assert orders[1].findtext("CustomerName") == "Tab\tand\nnewline"


def test_control_characters_dropped_from_excel(
    control_char_builder: OrderSummaryReportBuilder,
) -> None:
    ws = load_workbook(control_char_builder.export_excel()).active
    assert ws.cell(row=2, column=1).value == "ORD--1"
    assert ws.cell(row=2, column=3).value == "AcmeFreight"
    assert ws.cell(row=2, column=4).value == pytest.approx(210)


# ── Failures ─────────────────────────────────────────────────────────────


def test_render_failure_is_wrapped(
    builder: OrderSummaryReportBuilder, monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _boom(summary: object) -> None:
        raise TypeError("serializer exploded")

    monkeypatch.setattr(order_summary, "export_order_summary_xml", _boom)

    with pytest.raises(RenderError) as exc:
        builder.export_xml()
    assert exc.value.fmt == "xml"
