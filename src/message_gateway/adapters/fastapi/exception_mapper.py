"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from message_gateway.kernel.errors import (
    BaseError,
    DomainError,
    InfrastructureError,
    PublishError,
    StorageError,
    ValidationError,
)
from message_gateway.observability.correlation import CorrelationContext
from message_gateway.observability.logging import get_logger

logger = get_logger(__name__)


def _correlation_id() -> str | None:
    ctx = CorrelationContext.get()
    return ctx.correlation_id if ctx is not None else None


class FastAPIExceptionMapper:
    """Register error → HTTP status-code mappings on a FastAPI app.

    Error body schema::

        {"code": "validation_error", "message": "...", "detail": {...}, "correlation_id": "..."}

    Mappings
    --------
    ``ValidationError``         → 400 (request-body validation too)
    ``StorageError``            → 503
    ``PublishError``            → 503
    ``InfrastructureError``     → 503
    ``DomainError``             → 422
    """

    def __init__(self) -> None:
        # ORDER MATTERS: more-specific subtypes first
        self._map: list[tuple[type[Exception], int]] = [
            (ValidationError, 400),
            (StorageError, 503),
            (PublishError, 503),
            (InfrastructureError, 503),
            (DomainError, 422),
        ]

    @property
    def mappings(self) -> list[tuple[type[Exception], int]]:
        return list(self._map)

    def register(self, app: FastAPI) -> None:
        """Register all error handlers on a ``FastAPI`` app."""

        def make_handler(code: int) -> Callable[[Request, Exception], Any]:
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                if isinstance(exc, BaseError):
                    body = exc.to_dict()
                else:
                    body = {"code": "error", "message": str(exc), "detail": {}}
                body["correlation_id"] = _correlation_id()
                if code >= 500:
                    logger.error("http.request_failed", path=request.url.path, status=code, code=body["code"])
                return JSONResponse(status_code=code, content=body)

            return handler

        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, make_handler(status))
        app.add_exception_handler(RequestValidationError, self._request_validation_handler)

    @staticmethod
    async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: ARG004
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", "invalid"),
            }
            for err in exc.errors()
        ]
        body = ValidationError("Invalid request body", errors=errors).to_dict()
        body["correlation_id"] = _correlation_id()
        return JSONResponse(status_code=400, content=body)


__all__ = ["FastAPIExceptionMapper"]
