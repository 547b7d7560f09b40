"""Observability – health checks."""
from message_gateway.observability.health.check import HealthCheck, HealthStatus
from message_gateway.observability.health.registry import HealthReport, HealthRegistry
from message_gateway.observability.health.builtin import DatabaseHealthCheck, PublisherHealthCheck

__all__ = [
    "DatabaseHealthCheck",
    "HealthCheck",
    "HealthRegistry",
    "HealthReport",
    "HealthStatus",
    "PublisherHealthCheck",
]
