from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from freightdesk.app.models.customer import Customer, CustomerAddress, CustomerContact
# Resolves the Customer.orders relationship target.
from freightdesk.app.models.order import Order  # noqa: F401


class CustomerRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, customer_id: UUID) -> Customer | None:
        """Live customer with its addresses and contacts loaded."""
        stmt = (
            select(Customer)
            .options(selectinload(Customer.addresses), selectinload(Customer.contacts))
            .where(Customer.id == customer_id, Customer.deleted_at.is_(None))
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_code(self, customer_code: str) -> Customer | None:
        # Deleted customers keep their code reserved.
        stmt = select(Customer).where(Customer.customer_code == customer_code)
        return self.db.execute(stmt).scalar_one_or_none()

    def add(self, customer: Customer) -> Customer:
        self.db.add(customer)
        self.db.flush()
        return customer

    def replace_addresses(self, customer: Customer, addresses: list[CustomerAddress]) -> None:
        customer.addresses.clear()
        self.db.flush()
        for position, address in enumerate(addresses):
            address.position = position
            customer.addresses.append(address)
        self.db.flush()

    def replace_contacts(self, customer: Customer, contacts: list[CustomerContact]) -> None:
        customer.contacts.clear()
        self.db.flush()
        for position, contact in enumerate(contacts):
            contact.position = position
            customer.contacts.append(contact)
        self.db.flush()

    def list(
        self, skip: int, take: int, search: str | None = None,
    ) -> tuple[list[Customer], int]:
        base = select(Customer).where(Customer.deleted_at.is_(None))
        if search:
            like = f"%{search}%"
            base = base.where(
                Customer.customer_name.ilike(like) | Customer.customer_code.ilike(like)
            )
        total = self.db.execute(
            select(func.count()).select_from(base.subquery())
        ).scalar_one()
        rows = (
            self.db.execute(
                base.order_by(Customer.customer_code).offset(skip).limit(take)
            )
            .scalars()
            .all()
        )
        return list(rows), total

    def soft_delete(self, customer: Customer) -> None:
        customer.deleted_at = datetime.now(timezone.utc)
        self.db.flush()
