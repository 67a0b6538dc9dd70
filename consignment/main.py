"""Consignment API — FastAPI application factory."""


import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from consignment.core.config import settings
from consignment.core.exceptions import register_exception_handlers
from consignment.middleware.request_log import RequestLogMiddleware
from consignment.schemas.common import HealthResponse

from consignment.routers.v1.catalog import brands_router, categories_router, payment_methods_router
from consignment.routers.v1.contracts import router as contracts_v1_router
from consignment.routers.v1.expenses import router as expenses_v1_router
from consignment.routers.v1.items import router as items_v1_router
from consignment.routers.v1.metrics import router as metrics_v1_router
from consignment.routers.v1.payments import router as payments_v1_router
from consignment.routers.v1.vendors import router as vendors_v1_router

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.is_development else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    for router in (
        vendors_v1_router,
        items_v1_router,
        contracts_v1_router,
        expenses_v1_router,
        payments_v1_router,
        metrics_v1_router,
        brands_router,
        categories_router,
        payment_methods_router,
    ):
        app.include_router(router, prefix="/api/v1")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env)

    logger.info("%s ready (%s)", settings.app_name, settings.app_env)
    return app


app = create_app()
