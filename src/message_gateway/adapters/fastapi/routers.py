"""FastAPI adapter – message and health routers."""
from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from message_gateway.adapters.fastapi.deps import (
    get_health_registry,
    get_ingestion_service,
    get_status_reader,
)
from message_gateway.application import MessageIngestionService, MessageStatusReader
from message_gateway.observability.health import HealthRegistry


class CreateMessageRequest(BaseModel):
    content: str = Field(min_length=1)
    metadata: dict[str, Any] | None = None


class CreateMessageResponse(BaseModel):
    id: str
    correlation_id: str
    idempotency_id: str
    status: str


def FastAPIMessagesRouter(prefix: str = "/messages", tags: list[str] | None = None) -> APIRouter:
    """Return the ingestion (``POST {prefix}``) and status (``GET {prefix}/{id}/status``) routes."""
    router = APIRouter(prefix=prefix, tags=tags or ["messages"])

    @router.post("", status_code=201, response_model=CreateMessageResponse)
    async def create_message(
        body: CreateMessageRequest,
        service: Annotated[MessageIngestionService, Depends(get_ingestion_service)],
    ) -> dict[str, str]:
        created = await service.create_message(body.content, body.metadata)
        return created.to_dict()

    @router.get("/{idempotency_id}/status")
    async def get_message_status(
        idempotency_id: str,
        reader: Annotated[MessageStatusReader, Depends(get_status_reader)],
    ) -> dict[str, Any]:
        view = await reader.get_status(idempotency_id)
        return view.to_dict()

    return router


def FastAPIHealthRouter(path: str = "/health", tags: list[str] | None = None) -> APIRouter:
    """Return a liveness + readiness health-check router.

    Liveness at ``{path}/live`` always answers 200 while the process is up.
    Readiness at ``{path}/ready`` runs every check in the runtime's
    :class:`HealthRegistry` and answers 503 when any of them fails.
    """
    router = APIRouter(tags=tags or ["ops"])

    @router.get(f"{path}/live")
    async def liveness() -> dict[str, str]:
        return {"status": "ok"}

    @router.get(f"{path}/ready")
    async def readiness(registry: Annotated[HealthRegistry, Depends(get_health_registry)]) -> JSONResponse:
        report = await registry.run_all()
        content = report.to_dict()
        content["status"] = "ok" if report.overall else "degraded"
        return JSONResponse(status_code=200 if report.overall else 503, content=content)

    return router


__all__ = [
    "CreateMessageRequest",
    "CreateMessageResponse",
    "FastAPIHealthRouter",
    "FastAPIMessagesRouter",
]
