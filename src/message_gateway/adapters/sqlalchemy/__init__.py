"""SQLAlchemy adapter – message store, outbox repository, models and session factory."""
from message_gateway.adapters.sqlalchemy.models import (
    Base,
    MessageHistoryModel,
    MessageModel,
    OutboxModel,
    TimestampMixin,
)
from message_gateway.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from message_gateway.adapters.sqlalchemy.store import SqlAlchemyMessageStore
from message_gateway.adapters.sqlalchemy.outbox import SqlAlchemyOutboxRepository

__all__ = [
    "Base",
    "MessageHistoryModel",
    "MessageModel",
    "OutboxModel",
    "SqlAlchemyMessageStore",
    "SqlAlchemyOutboxRepository",
    "SqlAlchemySessionFactory",
    "TimestampMixin",
]
