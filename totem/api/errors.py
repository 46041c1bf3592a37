"""Global error responder.

Every failure that escapes a route handler ends up here and is rendered
into the envelope ``{"error": {"code", "message", "details"?}}``.
"""
from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from totem.core.config import Settings, get_settings
from totem.core.errors import AppError, ErrorKind, ValidationError
from totem.services.validation import VALIDATION_FAILED, violations_from_errors

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Erro interno do servidor"
ROUTE_NOT_FOUND_MESSAGE = "Rota não encontrada"


def error_body(code: str, message: str, details: Any = None) -> dict[str, Any]:
    """Build the error envelope, leaving ``details`` out when there is none."""
    error: dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error}


def render_app_error(error: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=error_body(error.code, error.message, error.details),
    )


def _settings_for(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return render_app_error(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError(VALIDATION_FAILED, violations_from_errors(exc.errors()))
    logger.warning(f"Request validation failed on {request.method} {request.url.path}: {error.details}")
    return render_app_error(error)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=error_body(ErrorKind.NOT_FOUND.code, ROUTE_NOT_FOUND_MESSAGE),
        )

    try:
        phrase = HTTPStatus(exc.status_code).phrase
    except ValueError:
        phrase = "Error"
    code = phrase.upper().replace(" ", "_").replace("-", "_")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    settings = _settings_for(request)
    details = None if settings.is_production else str(exc)
    return JSONResponse(
        status_code=ErrorKind.UNCLASSIFIED.status_code,
        content=error_body(ErrorKind.UNCLASSIFIED.code, INTERNAL_ERROR_MESSAGE, details),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the responder on ``app``."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
