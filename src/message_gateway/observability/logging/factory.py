"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from message_gateway.observability.logging.processors import CorrelationProcessor, ServiceNameProcessor


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def _pre_chain(service_name: str | None) -> list[Any]:
    chain: list[Any] = [] if not service_name else [ServiceNameProcessor(service_name)]
    chain += [
        structlog.contextvars.merge_contextvars,
        CorrelationProcessor(),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    return chain


class JsonLoggerFactory:
    """One JSON object per line on stderr, for structlog and stdlib loggers alike.

    uvicorn, aiokafka, aio-pika and SQLAlchemy log through the standard
    library; ``foreign_pre_chain`` gives their records the same fields.
    Unknown level names fall back to ``INFO``.
    """

    @staticmethod
    def configure(level: int | str = logging.INFO, service_name: str | None = None) -> None:
        pre_chain = _pre_chain(service_name)
        structlog.configure(
            processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        handler = logging.StreamHandler()
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=pre_chain,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(),
                ],
            )
        )
        root = logging.getLogger()
        root.handlers[:] = [handler]
        root.setLevel(_resolve_level(level))


__all__ = ["JsonLoggerFactory"]
