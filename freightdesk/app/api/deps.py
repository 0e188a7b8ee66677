"""Per-request construction of repositories and services."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from freightdesk.app.core.database import get_db
from freightdesk.app.repositories.customers import CustomerRepository
from freightdesk.app.repositories.orders import OrderRepository
from freightdesk.app.services.customers import CustomerService
from freightdesk.app.services.order_summary import OrderSummaryReportBuilder
from freightdesk.app.services.orders import OrderService


def get_order_repository(db: Session = Depends(get_db)) -> OrderRepository:
    return OrderRepository(db)


def get_customer_repository(db: Session = Depends(get_db)) -> CustomerRepository:
    return CustomerRepository(db)


def get_order_service(
    orders: OrderRepository = Depends(get_order_repository),
    customers: CustomerRepository = Depends(get_customer_repository),
) -> OrderService:
    return OrderService(orders, customers)


def get_customer_service(
    customers: CustomerRepository = Depends(get_customer_repository),
) -> CustomerService:
    return CustomerService(customers)


def get_report_builder(
    orders: OrderRepository = Depends(get_order_repository),
) -> OrderSummaryReportBuilder:
    return OrderSummaryReportBuilder(orders)
