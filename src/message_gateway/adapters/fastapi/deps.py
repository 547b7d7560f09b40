"""FastAPI adapter – dependencies resolving services from ``app.state.runtime``."""
from __future__ import annotations

from fastapi import Request

from message_gateway.application import MessageIngestionService, MessageStatusReader
from message_gateway.observability.health import HealthRegistry


def get_ingestion_service(request: Request) -> MessageIngestionService:
    return request.app.state.runtime.ingestion


def get_status_reader(request: Request) -> MessageStatusReader:
    return request.app.state.runtime.status_reader


def get_health_registry(request: Request) -> HealthRegistry:
    return request.app.state.runtime.health


__all__ = ["get_health_registry", "get_ingestion_service", "get_status_reader"]
