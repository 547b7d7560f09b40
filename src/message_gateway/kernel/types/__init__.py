"""Kernel types – identifiers."""
from message_gateway.kernel.types.ids import CorrelationId, EventId, IdempotencyId, new_id

__all__ = ["CorrelationId", "EventId", "IdempotencyId", "new_id"]
