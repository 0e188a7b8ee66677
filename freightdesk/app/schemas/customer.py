from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


def _email_or_none(v: str | None) -> str | None:
    if v is None or v == "":
        return None
    if "@" not in v or v.startswith("@") or v.endswith("@"):
        raise ValueError("Invalid email address")
    return v


# ─── Nested collections ───────────────────────────────────────────────────────


class AddressIn(BaseModel):
    address: str
    city: str | None = None
    state: str | None = None
    country: str | None = None
    telephone: str | None = None

    @field_validator("address")
    @classmethod
    def address_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Address is required")
        return v.strip()


class ContactIn(BaseModel):
    contact_name: str
    email: str | None = None
    phone: str | None = None
    job_title: str | None = None

    @field_validator("contact_name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Contact name is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def email_shape(cls, v: str | None) -> str | None:
        return _email_or_none(v)


class AddressOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    address: str
    city: str | None
    state: str | None
    country: str | None
    telephone: str | None


class ContactOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    contact_name: str
    email: str | None
    phone: str | None
    job_title: str | None


# ─── Customer ─────────────────────────────────────────────────────────────────


class CustomerCreate(BaseModel):
    customer_code: str
    customer_name: str
    telephone: str | None = None
    email: str | None = None
    country: str | None = None
    city: str | None = None
    state: str | None = None
    sales_person: str | None = None
    addresses: list[AddressIn] = []
    contacts: list[ContactIn] = []

    @field_validator("customer_code", "customer_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def email_shape(cls, v: str | None) -> str | None:
        return _email_or_none(v)


class CustomerUpdate(BaseModel):
    """Partial update.

    ``addresses`` and ``contacts``, when present, are complete new lists that
    replace the stored ones.
    """

    customer_code: str | None = None
    customer_name: str | None = None
    telephone: str | None = None
    email: str | None = None
    country: str | None = None
    city: str | None = None
    state: str | None = None
    sales_person: str | None = None
    addresses: list[AddressIn] | None = None
    contacts: list[ContactIn] | None = None

    @field_validator("customer_code", "customer_name")
    @classmethod
    def not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Field is required")
        return v.strip() if v is not None else v

    @field_validator("email")
    @classmethod
    def email_shape(cls, v: str | None) -> str | None:
        return _email_or_none(v)


class CustomerListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_code: str
    customer_name: str
    telephone: str | None
    email: str | None
    country: str | None
    city: str | None
    state: str | None
    sales_person: str | None
    created_at: datetime | None = None


class CustomerOut(CustomerListItem):
    addresses: list[AddressOut] = []
    contacts: list[ContactOut] = []


class CustomerListResponse(BaseModel):
    items: list[CustomerListItem]
    total: int
    page: int
    page_size: int
