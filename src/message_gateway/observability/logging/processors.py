"""Observability – structlog processors and the ``get_logger`` helper."""
from __future__ import annotations

from typing import Any

import structlog

from message_gateway.observability.correlation import CorrelationContext


class CorrelationProcessor:
    """Copies ``correlation_id`` and, once known, ``idempotency_id`` from the active
    :class:`CorrelationContext` onto every event. Keys already bound on the
    logger are left untouched.
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        ctx = CorrelationContext.get()
        if ctx is None:
            return event_dict
        event_dict.setdefault("correlation_id", ctx.correlation_id)
        if ctx.idempotency_id is not None:
            event_dict.setdefault("idempotency_id", ctx.idempotency_id)
        return event_dict


class ServiceNameProcessor:
    """Stamps ``service`` so lines from the gateway and the workers can be told apart."""

    def __init__(self, service_name: str) -> None:
        self.service_name = service_name

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        event_dict.setdefault("service", self.service_name)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """structlog logger for *name*, with *initial_values* bound when given."""
    logger = structlog.get_logger(name)
    return logger.bind(**initial_values) if initial_values else logger


__all__ = ["CorrelationProcessor", "ServiceNameProcessor", "get_logger"]
