"""FastAPI Application for the K&M Events checkout service."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kmEvents_checkout.features.checkout.presentation.router import (
    router as checkout_router,
)
from kmEvents_checkout.features.checkout.presentation.sessions import (
    close_session_registry,
)
from kmEvents_checkout.features.payment_status.presentation.router import (
    router as payment_status_router,
)
from kmEvents_checkout.shared.core.logging_config import configure_logging
from kmEvents_checkout.shared.core.settings import get_settings
from kmEvents_checkout.shared.infrastructure.http_clients import close_api_client
from kmEvents_checkout.shared.presentation.exception_handlers import (
    register_exception_handlers,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Checkout service starting on %s:%s", settings.host, settings.port)
    logger.info("Environment: %s, backend API: %s", settings.environment, settings.api_base_url)

    yield

    await close_session_registry()
    await close_api_client()
    logger.info("Checkout service shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="K&M Events Checkout",
        description="Checkout orchestration for K&M Events bookings and subscriptions",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(checkout_router, prefix="/checkout", tags=["Checkout"])
    app.include_router(payment_status_router, prefix="/payment", tags=["Payment Status"])

    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"service": "K&M Events Checkout", "status": "running"}

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "checkout",
            "api": settings.api_base_url,
        }

    return app


app = create_app()
