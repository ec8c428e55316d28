"""Exception handlers for the FastAPI application."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from kmEvents_checkout.shared.domain.exceptions import (
    ApiError,
    ApiTransportError,
    CheckoutError,
    CheckoutInProgressError,
    CheckoutSessionNotFoundError,
    CheckoutValidationError,
    GatewayLoadError,
)
from kmEvents_checkout.shared.presentation.api_response import APIResponse

logger = logging.getLogger(__name__)


def _envelope(status_code: int, message: str, errors: list[str]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse.error(message, errors).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers."""

    @app.exception_handler(CheckoutValidationError)
    async def validation_handler(
        request: Request, exc: CheckoutValidationError
    ) -> JSONResponse:
        return _envelope(400, exc.user_message, ["Invalid checkout request"])

    @app.exception_handler(CheckoutSessionNotFoundError)
    async def session_not_found_handler(
        request: Request, exc: CheckoutSessionNotFoundError
    ) -> JSONResponse:
        return _envelope(404, str(exc), ["Checkout session not found"])

    @app.exception_handler(CheckoutInProgressError)
    async def in_progress_handler(
        request: Request, exc: CheckoutInProgressError
    ) -> JSONResponse:
        return _envelope(409, str(exc), ["Checkout already in progress"])

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return _envelope(502, exc.user_message, ["Backend API error"])

    @app.exception_handler(ApiTransportError)
    async def api_transport_handler(
        request: Request, exc: ApiTransportError
    ) -> JSONResponse:
        return _envelope(502, str(exc), ["Backend API unreachable"])

    @app.exception_handler(GatewayLoadError)
    async def gateway_load_handler(
        request: Request, exc: GatewayLoadError
    ) -> JSONResponse:
        return _envelope(503, str(exc), ["Payment gateway unavailable"])

    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(
        request: Request, exc: CheckoutError
    ) -> JSONResponse:
        return _envelope(400, exc.user_message, [str(exc)])

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return _envelope(500, "Internal server error", [str(exc)])
