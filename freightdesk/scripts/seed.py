"""Create the tables and seed a sample customer and order.

Usage:
    python -m freightdesk.scripts.seed
"""

from __future__ import annotations

import logging
from datetime import date

from freightdesk.app.core.database import Base, get_engine, session_factory
from freightdesk.app.models.customer import Customer
from freightdesk.app.models.order import Order
from freightdesk.app.repositories.customers import CustomerRepository
from freightdesk.app.repositories.orders import OrderRepository
from freightdesk.app.schemas.order import ChargeCreate, OrderCreate
from freightdesk.app.services.orders import OrderService

logger = logging.getLogger(__name__)

SAMPLE_CUSTOMER = {
    "customer_code": "CUST001",
    "customer_name": "Global Logistics Ltd",
    "email": "contact@globallogistics.com",
    "telephone": "+1234567890",
    "city": "New York",
    "country": "USA",
    "sales_person": "John Doe",
}

SAMPLE_CHARGES: list[dict[str, object]] = [
    {"description": "Ocean freight", "quantity": 2, "sale_rate": 100, "cost_rate": 80, "vat_percent": 5, "currency": "USD"},
    {"description": "Terminal handling", "quantity": 1, "sale_rate": 350, "cost_rate": 300, "vat_percent": 5, "currency": "AED"},
]


def seed() -> None:
    engine = get_engine()
    Base.metadata.create_all(engine)
    db = session_factory(engine)()
    try:
        customers = CustomerRepository(db)
        customer = customers.get_by_code(SAMPLE_CUSTOMER["customer_code"])
        if customer is None:
            customer = customers.add(Customer(**SAMPLE_CUSTOMER))
            db.commit()
            logger.info("Created customer: %s", customer.customer_name)

        orders = OrderRepository(db)
        if orders.get_by_number("ORD-0001") is None:
            service = OrderService(orders, customers)
            order: Order = service.create_order(
                OrderCreate(
                    customer_id=customer.id,
                    order_number="ORD-0001",
                    order_date=date.today(),
                    execution_date=date.today(),
                    charges=[ChargeCreate(**c) for c in SAMPLE_CHARGES],
                )
            )
            logger.info("Created order: %s", order.order_number)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed()
