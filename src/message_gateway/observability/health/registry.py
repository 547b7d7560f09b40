"""Health – HealthRegistry aggregating readiness checks."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from message_gateway.observability.health.check import HealthCheck, HealthStatus

__all__ = ["HealthReport", "HealthRegistry"]


@dataclass
class HealthReport:
    results: dict[str, HealthStatus] = field(default_factory=dict)

    @property
    def overall(self) -> bool:
        return all(s.healthy for s in self.results.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "healthy": self.overall,
            "checks": {name: status.to_dict() for name, status in self.results.items()},
        }


class HealthRegistry:
    """Runs every registered check concurrently, each bounded by *timeout* seconds.

    A check that raises or times out is reported unhealthy; it never breaks
    the report.
    """

    def __init__(self, timeout: float = 2.0) -> None:
        self._checks: list[HealthCheck] = []
        self._timeout = timeout

    def register(self, check: HealthCheck) -> None:
        self._checks.append(check)

    async def _run_one(self, check: HealthCheck) -> HealthStatus:
        try:
            return await check.timed_check(self._timeout)
        except Exception as exc:  # noqa: BLE001
            return HealthStatus.failed(f"exception: {exc}")

    async def run_all(self) -> HealthReport:
        statuses = await asyncio.gather(*(self._run_one(check) for check in self._checks))
        return HealthReport(results={check.name: status for check, status in zip(self._checks, statuses)})
