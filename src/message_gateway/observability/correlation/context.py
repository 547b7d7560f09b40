"""Observability – RequestContext, CorrelationContext."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar
from typing import Mapping

from message_gateway.kernel.types import new_id

CORRELATION_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """Ambient context for one request or one consumed event."""
    correlation_id: str
    idempotency_id: str | None = None

    @classmethod
    def new(cls) -> "RequestContext":
        return cls(correlation_id=new_id())

    def with_idempotency_id(self, idempotency_id: str) -> "RequestContext":
        return dataclasses.replace(self, idempotency_id=idempotency_id)


_CTX_VAR: ContextVar[RequestContext | None] = ContextVar("_gateway_request_ctx", default=None)


class CorrelationContext:
    """Ambient correlation context stored in a ``ContextVar``."""

    @staticmethod
    def set(ctx: RequestContext) -> None:
        _CTX_VAR.set(ctx)

    @staticmethod
    def get() -> RequestContext | None:
        return _CTX_VAR.get()

    @staticmethod
    def get_or_new() -> RequestContext:
        ctx = _CTX_VAR.get()
        if ctx is None:
            ctx = RequestContext.new()
            _CTX_VAR.set(ctx)
        return ctx

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)

    @staticmethod
    def set_from_headers(headers: Mapping[str, str]) -> RequestContext:
        """Extract the correlation id from HTTP headers and store it.

        Priority: ``X-Correlation-ID`` → ``X-Request-ID`` → generated id.
        Header names are matched case-insensitively.
        """
        norm = {k.lower(): v for k, v in headers.items()}
        correlation_id = (
            norm.get(CORRELATION_HEADER.lower())
            or norm.get(REQUEST_ID_HEADER.lower())
            or new_id()
        )
        ctx = RequestContext(correlation_id=correlation_id)
        _CTX_VAR.set(ctx)
        return ctx


__all__ = ["CORRELATION_HEADER", "CorrelationContext", "REQUEST_ID_HEADER", "RequestContext"]
