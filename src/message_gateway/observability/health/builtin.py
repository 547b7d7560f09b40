"""Health – store and broker readiness checks."""
from __future__ import annotations

from typing import Any

import sqlalchemy as sa

from message_gateway.kernel.messaging import EventPublisher
from message_gateway.observability.health.check import HealthCheck, HealthStatus

__all__ = ["DatabaseHealthCheck", "PublisherHealthCheck"]


class DatabaseHealthCheck(HealthCheck):
    """Checks DB connectivity by running ``SELECT 1``."""

    def __init__(self, session_factory: Any) -> None:
        self._factory = session_factory

    @property
    def name(self) -> str:
        return "database"

    async def check(self) -> HealthStatus:
        try:
            async with self._factory() as session:
                await session.execute(sa.text("SELECT 1"))
        except Exception as exc:  # noqa: BLE001
            return HealthStatus.failed(str(exc))
        return HealthStatus.ok()


class PublisherHealthCheck(HealthCheck):
    """Healthy only while the broker publisher is ``READY``."""

    def __init__(self, publisher: EventPublisher) -> None:
        self._publisher = publisher

    @property
    def name(self) -> str:
        return f"broker:{self._publisher.transport}"

    async def check(self) -> HealthStatus:
        if self._publisher.is_ready:
            return HealthStatus.ok()
        return HealthStatus.failed(f"state={self._publisher.state.value}")
