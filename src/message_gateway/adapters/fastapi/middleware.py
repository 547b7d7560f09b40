"""FastAPI adapter – FastAPICorrelationIdMiddleware."""
from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from starlette.datastructures import Headers, MutableHeaders

from message_gateway.observability.correlation import (
    CORRELATION_HEADER,
    REQUEST_ID_HEADER,
    CorrelationContext,
)

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send


class FastAPICorrelationIdMiddleware:
    """Pure ASGI middleware giving every HTTP request a correlation id.

    The id comes from ``X-Correlation-ID``, then ``X-Request-ID``, and is
    generated when both are absent. It lives in :class:`CorrelationContext`
    and structlog's context variables while the request runs, and is echoed
    back on the response under *header_name*.
    """

    def __init__(self, app: "ASGIApp", header_name: str = CORRELATION_HEADER) -> None:
        self.app = app
        self.header_name = header_name

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        incoming = Headers(scope=scope)
        ctx = CorrelationContext.set_from_headers(
            {
                CORRELATION_HEADER: incoming.get(self.header_name, "").strip(),
                REQUEST_ID_HEADER: incoming.get(REQUEST_ID_HEADER, "").strip(),
            }
        )
        tokens = structlog.contextvars.bind_contextvars(correlation_id=ctx.correlation_id)

        async def send_with_correlation(message: "Message") -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(self.header_name, ctx.correlation_id)
            await send(message)

        try:
            await self.app(scope, receive, send_with_correlation)
        finally:
            structlog.contextvars.reset_contextvars(**tokens)
            CorrelationContext.clear()


__all__ = ["FastAPICorrelationIdMiddleware"]
