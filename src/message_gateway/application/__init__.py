"""Application – ingestion, status queries, processing, notifications and outbox dispatch."""
from message_gateway.application.ingestion import CreatedMessage, MessageIngestionService
from message_gateway.application.status import MessageStatusReader, StatusView
from message_gateway.application.processing import MessageProcessor, MessageWork
from message_gateway.application.notifications import NotificationSender, StatusNotifier
from message_gateway.application.outbox import OutboxDispatcher

__all__ = [
    "CreatedMessage",
    "MessageIngestionService",
    "MessageProcessor",
    "MessageStatusReader",
    "MessageWork",
    "NotificationSender",
    "OutboxDispatcher",
    "StatusNotifier",
    "StatusView",
]
