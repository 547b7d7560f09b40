"""Health – HealthStatus and the HealthCheck base class."""
from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

__all__ = ["HealthCheck", "HealthStatus"]


@dataclass
class HealthStatus:
    healthy: bool
    detail: str | None = None
    latency_ms: float = 0.0

    @classmethod
    def ok(cls) -> "HealthStatus":
        return cls(healthy=True)

    @classmethod
    def failed(cls, detail: str) -> "HealthStatus":
        return cls(healthy=False, detail=detail)

    def to_dict(self) -> dict[str, Any]:
        return {"healthy": self.healthy, "detail": self.detail, "latency_ms": round(self.latency_ms, 2)}


class HealthCheck(ABC):
    """One readiness dependency (the store, the broker)."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    async def check(self) -> HealthStatus: ...

    async def timed_check(self, timeout: float | None = None) -> HealthStatus:
        """Run :meth:`check`, recording latency; a check slower than *timeout* is unhealthy."""
        start = time.monotonic()
        try:
            status = await asyncio.wait_for(self.check(), timeout=timeout)
        except asyncio.TimeoutError:
            status = HealthStatus.failed(f"timed out after {timeout}s")
        status.latency_ms = (time.monotonic() - start) * 1000
        return status
