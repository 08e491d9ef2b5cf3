"""
Order Tracker — Application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `api/`, `models/`, `services/` and `core/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ordertrack.api.endpoints.auth import limiter
from ordertrack.api.router import api_router
from ordertrack.core.config import settings, validate_environment
from ordertrack.core.exceptions import register_exception_handlers
from ordertrack.db.base import Base
from ordertrack.db.seed import seed_admin, seed_column_permissions
from ordertrack.db.session import async_session_factory, engine

# Ensure all models are imported so metadata.create_all can see them
from ordertrack.models.column_permission import ColumnPermission  # noqa: F401
from ordertrack.models.custom_page import CustomPage  # noqa: F401
from ordertrack.models.notification import Notification  # noqa: F401
from ordertrack.models.order import Order  # noqa: F401
from ordertrack.models.priority_order import PriorityOrder  # noqa: F401
from ordertrack.models.user import User  # noqa: F401

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.environment = validate_environment(settings)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    async with async_session_factory() as session:
        await seed_admin(session, settings)
        await seed_column_permissions(session)

    logger.info("Order Tracker v%s started", settings.VERSION)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Production order tracking with role-based column permissions",
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    origins = list(settings.CORS_ORIGINS)
    if settings.PUBLIC_BASE_URL and settings.PUBLIC_BASE_URL not in origins:
        origins.append(settings.PUBLIC_BASE_URL)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["x-logout-flow", "X-Total-Count", "X-Total-Pages"],
    )

    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_PREFIX)

    return application


app = create_app()
