import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from freightdesk.app.api.v1.api import api_router
from freightdesk.app.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="FreightDesk Order Management")

# ─── CORS — restrict to configured origins ────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Accept", "Accept-Language"],
    expose_headers=["Content-Disposition"],
)

app.include_router(api_router)
