"""SchoolDesk Demo API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the {success: false, message} envelope
    - CORS configured from settings (not hardcoded)
    - Demo store seeded on startup via lifespan; nothing persists across restarts
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from schooldesk import __version__
from schooldesk.api.error_handlers import register_error_handlers
from schooldesk.api.routes import (
    demo_academics, demo_cash, demo_dashboard, demo_payments,
    demo_purchases, demo_reports, health,
)
from schooldesk.config import get_settings
from schooldesk.infrastructure.demo_store import init_store
from schooldesk.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_store()
    logger.info("SchoolDesk API started")
    yield
    logger.info("SchoolDesk API shutting down")


app = FastAPI(title="SchoolDesk API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(demo_academics.students_router)
app.include_router(demo_academics.courses_router)
app.include_router(demo_academics.enrollments_router)
app.include_router(demo_payments.router)
app.include_router(demo_cash.router)
app.include_router(demo_purchases.router)
app.include_router(demo_reports.router)
app.include_router(demo_dashboard.router)

register_error_handlers(app)
