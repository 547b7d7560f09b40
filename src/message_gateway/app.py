"""HTTP gateway – FastAPI application factory.

Run with::

    uvicorn message_gateway.app:create_app --factory
"""
from __future__ import annotations

import contextlib
from typing import AsyncIterator

from fastapi import FastAPI

from message_gateway import __version__
from message_gateway.adapters.fastapi import (
    FastAPICorrelationIdMiddleware,
    FastAPIExceptionMapper,
    FastAPIHealthRouter,
    FastAPIMessagesRouter,
)
from message_gateway.config import GatewaySettings, load_settings
from message_gateway.observability.logging import JsonLoggerFactory
from message_gateway.runtime import Runtime


def create_app(
    settings: GatewaySettings | None = None,
    runtime: Runtime | None = None,
    *,
    configure_logging: bool = True,
) -> FastAPI:
    """Build the gateway app.

    The runtime (publisher, store, engine pool) is created and connected in
    the lifespan, so a broker that cannot be reached stops startup before the
    first request is accepted. Pass *runtime* to inject prepared resources.
    """
    settings = settings or (runtime.settings if runtime is not None else load_settings())
    if configure_logging:
        JsonLoggerFactory.configure(settings.log_level, service_name=settings.service_name)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        active = runtime or Runtime.from_settings(settings)
        try:
            await active.connect()
            app.state.runtime = active
            yield
        finally:
            await active.close()

    app = FastAPI(title="message-gateway", version=__version__, lifespan=lifespan)
    app.add_middleware(FastAPICorrelationIdMiddleware)
    FastAPIExceptionMapper().register(app)
    app.include_router(FastAPIMessagesRouter())
    app.include_router(FastAPIHealthRouter())
    return app


def main() -> None:
    import uvicorn

    settings = load_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=3000, log_config=None)


__all__ = ["create_app", "main"]
