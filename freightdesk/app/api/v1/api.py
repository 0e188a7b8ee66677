from fastapi import APIRouter

from freightdesk.app.api.v1.endpoints import customers, orders, reports

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
