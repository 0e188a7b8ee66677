"""Order lifecycle: create, full-replace update, lookup, listing, soft delete."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from freightdesk.app.core.errors import ConflictError, NotFoundError
from freightdesk.app.models.order import Order, OrderCharge
from freightdesk.app.repositories.customers import CustomerRepository
from freightdesk.app.repositories.orders import OrderRepository
from freightdesk.app.schemas.order import ChargeCreate, OrderCreate, OrderUpdate
from freightdesk.app.services.charges import calculate_charge

logger = logging.getLogger(__name__)


def build_charge(payload: ChargeCreate) -> OrderCharge:
    """Create an ``OrderCharge`` with its derived amounts filled in."""
    amounts = calculate_charge(
        payload.quantity, payload.sale_rate, payload.cost_rate, payload.vat_percent,
    )
    return OrderCharge(
        description=payload.description,
        quantity=payload.quantity,
        sale_rate=payload.sale_rate,
        cost_rate=payload.cost_rate,
        vat_percent=payload.vat_percent,
        currency=payload.currency,
        **amounts.as_dict(),
    )


class OrderService:
    def __init__(self, orders: OrderRepository, customers: CustomerRepository) -> None:
        self.orders = orders
        self.customers = customers
        self.db = orders.db

    def _require_customer(self, customer_id: UUID) -> None:
        if self.customers.get(customer_id) is None:
            raise NotFoundError("Customer", customer_id)

    def _require_unique_number(self, order_number: str, exclude: UUID | None = None) -> None:
        existing = self.orders.get_by_number(order_number)
        if existing is not None and existing.id != exclude:
            raise ConflictError(f"Order number {order_number} already exists")

    def get_order(self, order_id: UUID) -> Order:
        order = self.orders.get(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    def create_order(self, payload: OrderCreate) -> Order:
        self._require_customer(payload.customer_id)
        self._require_unique_number(payload.order_number)

        order = Order(
            order_number=payload.order_number,
            customer_id=payload.customer_id,
            order_date=payload.order_date,
            execution_date=payload.execution_date,
        )
        order.charges = [build_charge(c) for c in payload.charges]
        for position, charge in enumerate(order.charges):
            charge.position = position
        try:
            self.orders.add(order)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError(f"Order number {payload.order_number} already exists") from exc
        logger.info("Created order %s with %d charges", order.order_number, len(order.charges))
        return self.get_order(order.id)

    def update_order(self, order_id: UUID, payload: OrderUpdate) -> Order:
        """Apply header changes and, if given, replace the whole charge set.

        Everything happens in one transaction; on any error nothing is kept.
        """
        order = self.get_order(order_id)
        fields = payload.model_dump(exclude_unset=True, exclude={"charges"})

        try:
            if "customer_id" in fields and fields["customer_id"] is not None:
                self._require_customer(fields["customer_id"])
            if fields.get("order_number"):
                self._require_unique_number(fields["order_number"], exclude=order.id)
            for name, value in fields.items():
                if name == "execution_date" or value is not None:
                    setattr(order, name, value)
            if payload.charges is not None:
                self.orders.replace_charges(order, [build_charge(c) for c in payload.charges])
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError(f"Order {order_id} conflicts with an existing order number") from exc
        except Exception:
            self.db.rollback()
            raise

        logger.info("Updated order %s", order.order_number)
        return self.get_order(order_id)

    def list_orders(
        self, page: int, page_size: int, search: str | None = None,
    ) -> tuple[list[Order], int]:
        skip = (page - 1) * page_size
        return self.orders.list(skip, page_size, search)

    def delete_order(self, order_id: UUID) -> None:
        order = self.get_order(order_id)
        self.orders.soft_delete(order)
        self.db.commit()
        logger.info("Soft-deleted order %s", order.order_number)
