"""
Exception → HTTP response mapping.

Token failures answer with a bare status and no body (existing clients
depend on it); everything else uses the ``{"error": ...}`` envelope.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from auth.dependencies import InvalidToken, Unauthenticated
from auth.store import EmailAlreadyRegistered

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request body"


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the application's exception handlers."""

    @app.exception_handler(Unauthenticated)
    async def unauthenticated(request: Request, exc: Unauthenticated) -> Response:
        return Response(status_code=status.HTTP_401_UNAUTHORIZED)

    @app.exception_handler(InvalidToken)
    async def invalid_token(request: Request, exc: InvalidToken) -> Response:
        return Response(status_code=status.HTTP_403_FORBIDDEN)

    @app.exception_handler(EmailAlreadyRegistered)
    async def email_taken(request: Request, exc: EmailAlreadyRegistered) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_failed(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.exception_handler(SQLAlchemyError)
    async def store_failure(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(OSError)
    @app.exception_handler(asyncio.TimeoutError)
    async def store_unreachable(request: Request, exc: Exception) -> JSONResponse:
        # Driver-level connect failures (refused, timed out) are not wrapped by SQLAlchemy
        logger.error("Store unreachable on %s %s: %r", request.method, request.url.path, exc)
        return _error(status.HTTP_400_BAD_REQUEST, str(exc) or exc.__class__.__name__)
