"""Tests for per-order aggregation into summary rows."""
from __future__ import annotations

import itertools
import logging
from datetime import date

import pytest

from freightdesk.app.services.aggregation import summarize_order
from freightdesk.tests.conftest import charge, snapshot


def test_single_usd_line_in_usd() -> None:
    row = summarize_order(snapshot("ORD-1", date(2024, 6, 1)), "USD")

    assert row.order_number == "ORD-1"
    assert row.execution_date == "2024-06-01"
    assert row.customer_name == "Global Logistics Ltd"
    assert row.sale_amount == pytest.approx(200)
    assert row.cost_amount == pytest.approx(160)
    assert row.vat_sale == pytest.approx(10)
    assert row.vat_cost == pytest.approx(8)
    assert row.total_sale == pytest.approx(210)
    assert row.total_cost == pytest.approx(168)
    assert row.net_amount == pytest.approx(42)
    assert row.currency == "USD"


def test_single_usd_line_in_aed() -> None:
    row = summarize_order(snapshot("ORD-1"), "AED")

    assert row.total_sale == pytest.approx(210 * 3.6725)
    assert row.total_sale == pytest.approx(771.225)
    assert row.total_cost == pytest.approx(616.98)
    assert row.net_amount == pytest.approx(42 * 3.6725)
    assert row.currency == "AED"


def test_order_without_charges_is_all_zero() -> None:
    row = summarize_order(snapshot("ORD-EMPTY", charges=[]), "USD")

    for name in ("sale_amount", "cost_amount", "vat_sale", "vat_cost", "total_sale", "total_cost", "net_amount"):
        assert getattr(row, name) == 0
    assert row.execution_date == ""


def test_lines_are_converted_from_their_own_currency() -> None:
    lines = [
        charge(quantity=1, sale_rate=100, cost_rate=50, vat_percent=0, currency="USD"),
        charge(quantity=1, sale_rate=367.25, cost_rate=0, vat_percent=0, currency="AED"),
    ]
    row = summarize_order(snapshot("ORD-MIX", charges=lines), "USD")

    assert row.total_sale == pytest.approx(200)
    assert row.total_cost == pytest.approx(50)
    assert row.net_amount == pytest.approx(150)
    assert row.unconverted_currencies == ()


def test_summation_is_order_independent() -> None:
    lines = [
        charge(quantity=3, sale_rate=19.99, cost_rate=11.5, vat_percent=5, currency="USD"),
        charge(quantity=1, sale_rate=1250, cost_rate=900, vat_percent=0, currency="AED"),
        charge(quantity=7.5, sale_rate=0.33, cost_rate=0.1, vat_percent=15, currency="USD"),
        charge(quantity=2, sale_rate=0, cost_rate=45, vat_percent=5, currency="AED"),
    ]
    reference = summarize_order(snapshot("ORD-P", charges=lines), "AED")

    for perm in itertools.permutations(lines):
        row = summarize_order(snapshot("ORD-P", charges=list(perm)), "AED")
        assert row.total_sale == pytest.approx(reference.total_sale)
        assert row.total_cost == pytest.approx(reference.total_cost)
        assert row.vat_sale == pytest.approx(reference.vat_sale)
        assert row.vat_cost == pytest.approx(reference.vat_cost)
        assert row.net_amount == pytest.approx(reference.net_amount)


def test_net_is_total_sale_minus_total_cost() -> None:
    lines = [
        charge(quantity=1, sale_rate=10, cost_rate=30, vat_percent=5),
        charge(quantity=2, sale_rate=40, cost_rate=5, vat_percent=5),
    ]
    row = summarize_order(snapshot("ORD-NET", charges=lines), "USD")
    assert row.net_amount == pytest.approx(row.total_sale - row.total_cost)


def test_unsupported_currency_passes_through_and_is_flagged(
    caplog: pytest.LogCaptureFixture,
) -> None:
    lines = [
        charge(quantity=1, sale_rate=100, cost_rate=0, vat_percent=0, currency="EUR"),
        charge(quantity=1, sale_rate=100, cost_rate=0, vat_percent=0, currency="USD"),
    ]
    with caplog.at_level(logging.WARNING, logger="freightdesk.app.services.aggregation"):
        row = summarize_order(snapshot("ORD-EUR", charges=lines), "USD")

    assert row.total_sale == pytest.approx(200)
    assert row.unconverted_currencies == ("EUR",)
    assert "ORD-EUR" in caplog.text
