"""FastAPI adapter – routers, correlation middleware and error mapping."""
from message_gateway.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from message_gateway.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware
from message_gateway.adapters.fastapi.routers import FastAPIHealthRouter, FastAPIMessagesRouter

__all__ = [
    "FastAPICorrelationIdMiddleware",
    "FastAPIExceptionMapper",
    "FastAPIHealthRouter",
    "FastAPIMessagesRouter",
]
