"""Observability – correlation context."""
from message_gateway.observability.correlation.context import (
    CORRELATION_HEADER,
    REQUEST_ID_HEADER,
    CorrelationContext,
    RequestContext,
)

__all__ = ["CORRELATION_HEADER", "CorrelationContext", "REQUEST_ID_HEADER", "RequestContext"]
