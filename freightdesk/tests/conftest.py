"""Shared test fixtures.

Each test gets a fresh in-memory SQLite database, so tests never pollute
each other or a real database.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from freightdesk.app.core.database import Base, get_db
from freightdesk.app.main import app
from freightdesk.app.models.customer import Customer
from freightdesk.app.models.order import Order
from freightdesk.app.repositories.customers import CustomerRepository
from freightdesk.app.repositories.orders import OrderRepository
from freightdesk.app.schemas.order import ChargeCreate, OrderCreate
from freightdesk.app.services.aggregation import OrderSnapshot
from freightdesk.app.services.charges import ChargeLine
from freightdesk.app.services.orders import OrderService


# ─── In-memory order sources for engine tests ────────────────────────────────


class StaticOrderSource:
    """Returns a fixed snapshot and records the ranges it was asked for."""

    def __init__(self, orders: list[OrderSnapshot]) -> None:
        self.orders = orders
        self.calls: list[tuple[date | None, date | None]] = []

    def fetch_orders_in_range(
        self, start: date | None = None, end: date | None = None,
    ) -> list[OrderSnapshot]:
        self.calls.append((start, end))
        return list(self.orders)


class FailingOrderSource:
    def fetch_orders_in_range(
        self, start: date | None = None, end: date | None = None,
    ) -> list[OrderSnapshot]:
        raise ConnectionError("database unavailable")


def charge(
    quantity: float = 2,
    sale_rate: float = 100,
    cost_rate: float = 80,
    vat_percent: float = 5,
    currency: str = "USD",
    description: str = "Ocean freight",
) -> ChargeLine:
    return ChargeLine(
        description=description,
        quantity=quantity,
        sale_rate=sale_rate,
        cost_rate=cost_rate,
        vat_percent=vat_percent,
        currency=currency,
    )


def snapshot(
    order_number: str,
    execution_date: date | None = None,
    charges: list[ChargeLine] | None = None,
    customer_name: str = "Global Logistics Ltd",
) -> OrderSnapshot:
    return OrderSnapshot(
        order_number=order_number,
        customer_name=customer_name,
        execution_date=execution_date,
        charges=tuple(charges if charges is not None else [charge()]),
    )


# ─── Database ────────────────────────────────────────────────────────────────


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture()
def db(engine: Engine) -> Generator[Session, None, None]:
    session = Session(bind=engine, autoflush=False)
    yield session
    session.close()


@pytest.fixture()
def client(db: Session) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the test session."""

    def _override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ─── Customers & orders ──────────────────────────────────────────────────────


@pytest.fixture()
def customer(db: Session) -> Customer:
    c = Customer(
        customer_code="CUST001",
        customer_name="Global Logistics Ltd",
        email="contact@globallogistics.com",
        city="Dubai",
        country="AE",
    )
    db.add(c)
    db.commit()
    return c


@pytest.fixture()
def order_service(db: Session) -> OrderService:
    return OrderService(OrderRepository(db), CustomerRepository(db))


@pytest.fixture()
def make_order(
    order_service: OrderService, customer: Customer,
) -> Callable[..., Order]:
    """Create a persisted order; charges are dicts of ``ChargeCreate`` fields."""

    def _make(
        order_number: str,
        execution_date: date | None = None,
        charges: list[dict[str, object]] | None = None,
    ) -> Order:
        if charges is None:
            charges = [{
                "description": "Ocean freight",
                "quantity": 2,
                "sale_rate": 100,
                "cost_rate": 80,
                "vat_percent": 5,
                "currency": "USD",
            }]
        return order_service.create_order(
            OrderCreate(
                customer_id=customer.id,
                order_number=order_number,
                order_date=date(2024, 1, 1),
                execution_date=execution_date,
                charges=[ChargeCreate(**c) for c in charges],
            )
        )

    return _make
