"""SQLAlchemy access to orders and their charge lines.

Repositories are constructed per request around a ``Session`` and never
commit; the calling service owns the transaction.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Protocol
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload, selectinload

from freightdesk.app.models.customer import Customer
from freightdesk.app.models.order import Order, OrderCharge
from freightdesk.app.services.aggregation import OrderSnapshot
from freightdesk.app.services.charges import ChargeLine


class OrderSource(Protocol):
    """Anything that can hand the report engine a consistent order snapshot."""

    def fetch_orders_in_range(
        self, start: date | None = None, end: date | None = None,
    ) -> list[OrderSnapshot]: ...


def _snapshot(order: Order) -> OrderSnapshot:
    return OrderSnapshot(
        order_number=order.order_number,
        customer_name=order.customer.customer_name,
        execution_date=order.execution_date,
        charges=tuple(
            ChargeLine(
                description=c.description,
                quantity=c.quantity,
                sale_rate=c.sale_rate,
                cost_rate=c.cost_rate,
                vat_percent=c.vat_percent,
                currency=c.currency,
            )
            for c in order.charges
        ),
    )


class OrderRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    # ── Report feed ──────────────────────────────────────────────────────

    def fetch_orders_in_range(
        self, start: date | None = None, end: date | None = None,
    ) -> list[OrderSnapshot]:
        """Live orders, filtered on execution date only when both bounds are set."""
        stmt = (
            select(Order)
            .options(joinedload(Order.customer), selectinload(Order.charges))
            .where(Order.deleted_at.is_(None))
        )
        if start is not None and end is not None:
            stmt = stmt.where(
                Order.execution_date.is_not(None),
                Order.execution_date >= start,
                Order.execution_date <= end,
            )
        orders = self.db.execute(stmt).unique().scalars().all()
        return [_snapshot(o) for o in orders]

    # ── CRUD ─────────────────────────────────────────────────────────────

    def get(self, order_id: UUID) -> Order | None:
        stmt = (
            select(Order)
            .options(joinedload(Order.customer), selectinload(Order.charges))
            .where(Order.id == order_id, Order.deleted_at.is_(None))
        )
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def get_by_number(self, order_number: str) -> Order | None:
        stmt = select(Order).where(Order.order_number == order_number)
        return self.db.execute(stmt).scalar_one_or_none()

    def add(self, order: Order) -> Order:
        self.db.add(order)
        self.db.flush()
        return order

    def replace_charges(self, order: Order, charges: list[OrderCharge]) -> None:
        """Delete every existing line of ``order`` and attach ``charges``."""
        order.charges.clear()
        self.db.flush()
        for position, charge in enumerate(charges):
            charge.position = position
            order.charges.append(charge)
        self.db.flush()

    def list(
        self, skip: int, take: int, search: str | None = None,
    ) -> tuple[list[Order], int]:
        base = (
            select(Order)
            .join(Customer, Order.customer_id == Customer.id)
            .where(Order.deleted_at.is_(None))
        )
        if search:
            like = f"%{search}%"
            base = base.where(
                Order.order_number.ilike(like) | Customer.customer_name.ilike(like)
            )
        total = self.db.execute(
            select(func.count()).select_from(base.subquery())
        ).scalar_one()
        rows = (
            self.db.execute(
                base.options(joinedload(Order.customer))
                .order_by(Order.created_at.desc(), Order.order_number.desc())
                .offset(skip)
                .limit(take)
            )
            .scalars()
            .all()
        )
        return list(rows), total

    def soft_delete(self, order: Order) -> None:
        order.deleted_at = datetime.now(timezone.utc)
        self.db.flush()
