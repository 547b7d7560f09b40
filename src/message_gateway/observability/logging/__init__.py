"""Observability – structured logging."""
from message_gateway.observability.logging.processors import CorrelationProcessor, ServiceNameProcessor, get_logger
from message_gateway.observability.logging.factory import JsonLoggerFactory

__all__ = ["CorrelationProcessor", "JsonLoggerFactory", "ServiceNameProcessor", "get_logger"]
