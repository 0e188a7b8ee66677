from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import (
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freightdesk.app.core.database import Base
from freightdesk.app.models.customer import Customer


# ─── Order ────────────────────────────────────────────────────────────────────


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    order_number: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    customer_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("customers.id"), nullable=False
    )
    order_date: Mapped[date] = mapped_column(Date, nullable=False)
    execution_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    customer: Mapped[Customer] = relationship(back_populates="orders")
    charges: Mapped[list[OrderCharge]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderCharge.position",
    )

    __table_args__ = (
        Index("ix_orders_execution_date", "execution_date"),
        Index("ix_orders_customer_id", "customer_id"),
    )

    @property
    def customer_name(self) -> str:
        return self.customer.customer_name


# ─── Charge lines ─────────────────────────────────────────────────────────────


class OrderCharge(Base):
    """One billable/cost line on an order.

    The six amount columns are derived from the raw inputs when the line is
    written and are never edited on their own.
    """

    __tablename__ = "order_charges"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    sale_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    cost_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    vat_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    sale_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    cost_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    vat_sale: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    vat_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_sale: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    order: Mapped[Order] = relationship(back_populates="charges")

    __table_args__ = (
        Index("ix_order_charges_order_id", "order_id"),
    )
