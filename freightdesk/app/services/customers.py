from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from freightdesk.app.core.errors import ConflictError, NotFoundError
from freightdesk.app.models.customer import Customer, CustomerAddress, CustomerContact
from freightdesk.app.repositories.customers import CustomerRepository
from freightdesk.app.schemas.customer import AddressIn, ContactIn, CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)

_NESTED = {"addresses", "contacts"}


def _addresses(items: list[AddressIn]) -> list[CustomerAddress]:
    return [CustomerAddress(**a.model_dump()) for a in items]


def _contacts(items: list[ContactIn]) -> list[CustomerContact]:
    return [CustomerContact(**c.model_dump()) for c in items]


class CustomerService:
    def __init__(self, customers: CustomerRepository) -> None:
        self.customers = customers
        self.db = customers.db

    def _require_unique_code(self, customer_code: str, exclude: UUID | None = None) -> None:
        existing = self.customers.get_by_code(customer_code)
        if existing is not None and existing.id != exclude:
            raise ConflictError(f"Customer code {customer_code} already exists")

    def create_customer(self, payload: CustomerCreate) -> Customer:
        self._require_unique_code(payload.customer_code)

        customer = Customer(**payload.model_dump(exclude=_NESTED))
        customer.addresses = _addresses(payload.addresses)
        customer.contacts = _contacts(payload.contacts)
        for items in (customer.addresses, customer.contacts):
            for position, item in enumerate(items):
                item.position = position
        try:
            self.customers.add(customer)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError(
                f"Customer code {payload.customer_code} already exists"
            ) from exc

        logger.info("Created customer %s", customer.customer_code)
        return self.get_customer(customer.id)

    def get_customer(self, customer_id: UUID) -> Customer:
        customer = self.customers.get(customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    def update_customer(self, customer_id: UUID, payload: CustomerUpdate) -> Customer:
        """Apply field changes and replace any supplied nested list wholesale."""
        customer = self.get_customer(customer_id)
        fields = payload.model_dump(exclude_unset=True, exclude=_NESTED)

        try:
            if fields.get("customer_code"):
                self._require_unique_code(fields["customer_code"], exclude=customer.id)
            for name, value in fields.items():
                # Code and name are required columns; None means "leave as is".
                if value is None and name in ("customer_code", "customer_name"):
                    continue
                setattr(customer, name, value)
            if payload.addresses is not None:
                self.customers.replace_addresses(customer, _addresses(payload.addresses))
            if payload.contacts is not None:
                self.customers.replace_contacts(customer, _contacts(payload.contacts))
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError(
                f"Customer {customer_id} conflicts with an existing customer code"
            ) from exc
        except Exception:
            self.db.rollback()
            raise

        logger.info("Updated customer %s", customer.customer_code)
        return self.get_customer(customer_id)

    def list_customers(
        self, page: int, page_size: int, search: str | None = None,
    ) -> tuple[list[Customer], int]:
        skip = (page - 1) * page_size
        return self.customers.list(skip, page_size, search)

    def delete_customer(self, customer_id: UUID) -> None:
        customer = self.get_customer(customer_id)
        self.customers.soft_delete(customer)
        self.db.commit()
        logger.info("Soft-deleted customer %s", customer.customer_code)
