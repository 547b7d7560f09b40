"""SQLAlchemy adapter – SqlAlchemyMessageStore."""
from __future__ import annotations

import contextlib
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from message_gateway.adapters.sqlalchemy.models import MessageHistoryModel, MessageModel, OutboxModel
from message_gateway.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from message_gateway.kernel.errors import StorageError
from message_gateway.kernel.messaging import (
    HistoryEntry,
    MessageRecord,
    MessageStatus,
    MessageStore,
    OutboxRecord,
)
from message_gateway.kernel.time import Clock, SystemClock, as_utc


def _insert_for(dialect_name: str) -> Any:
    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise StorageError("upsert_pending", f"Dialect '{dialect_name}' has no ON CONFLICT support")
    return insert


class SqlAlchemyMessageStore(MessageStore):
    """Message store over PostgreSQL (SQLite in tests).

    Every operation opens its own session and transaction; driver failures are
    logged and re-raised as :class:`StorageError`.
    """

    def __init__(self, session_factory: SqlAlchemySessionFactory, clock: Clock | None = None) -> None:
        self._factory = session_factory
        self._clock = clock or SystemClock()
        self._insert = _insert_for(session_factory.dialect_name)

    def _transaction(self, operation: str) -> contextlib.AbstractAsyncContextManager[AsyncSession]:
        return self._factory.transaction(operation)

    def _upsert_statement(self, idempotency_id: str, correlation_id: str, payload: dict[str, Any]) -> Any:
        now = self._clock.now()
        stmt = self._insert(MessageModel).values(
            idempotency_id=idempotency_id,
            correlation_id=correlation_id,
            status=MessageStatus.PENDING.value,
            payload=payload,
            created_at=now,
            updated_at=now,
        )
        return stmt.on_conflict_do_update(
            index_elements=[MessageModel.idempotency_id],
            set_={"updated_at": now},
        )

    async def upsert_pending(self, idempotency_id: str, correlation_id: str, payload: dict[str, Any]) -> None:
        async with self._transaction("upsert_pending") as session:
            await session.execute(self._upsert_statement(idempotency_id, correlation_id, payload))

    async def upsert_pending_with_outbox(
        self,
        idempotency_id: str,
        correlation_id: str,
        payload: dict[str, Any],
        outbox_record: OutboxRecord,
    ) -> None:
        async with self._transaction("upsert_pending_with_outbox") as session:
            await session.execute(self._upsert_statement(idempotency_id, correlation_id, payload))
            session.add(
                OutboxModel(
                    id=outbox_record.id,
                    idempotency_id=outbox_record.idempotency_id,
                    event_type=outbox_record.event_type,
                    channel=outbox_record.channel,
                    payload=outbox_record.payload,
                    headers=outbox_record.headers,
                    status=outbox_record.status.value,
                    attempts=outbox_record.attempts,
                    created_at=self._clock.now(),
                )
            )

    async def get(self, idempotency_id: str) -> MessageRecord | None:
        async with self._transaction("get") as session:
            row = await session.get(MessageModel, idempotency_id)
            if row is None:
                return None
            return MessageRecord(
                idempotency_id=row.idempotency_id,
                correlation_id=row.correlation_id,
                status=MessageStatus(row.status),
                payload=dict(row.payload),
                created_at=as_utc(row.created_at),
                updated_at=as_utc(row.updated_at),
            )

    async def append_history(self, entry: HistoryEntry) -> None:
        async with self._transaction("append_history") as session:
            session.add(self._history_row(entry))

    async def list_history(self, idempotency_id: str) -> list[HistoryEntry]:
        async with self._transaction("list_history") as session:
            result = await session.execute(
                select(MessageHistoryModel)
                .where(MessageHistoryModel.idempotency_id == idempotency_id)
                .order_by(MessageHistoryModel.created_at.asc(), MessageHistoryModel.id.asc())
            )
            return [
                HistoryEntry(
                    id=row.id,
                    idempotency_id=row.idempotency_id,
                    correlation_id=row.correlation_id,
                    status=MessageStatus(row.status),
                    service_name=row.service_name,
                    event_id=row.event_id,
                    error_message=row.error_message,
                    created_at=as_utc(row.created_at),
                )
                for row in result.scalars().all()
            ]

    async def update_status(
        self,
        idempotency_id: str,
        correlation_id: str,
        status: MessageStatus,
        service_name: str,
        event_id: str,
        error_message: str | None = None,
    ) -> None:
        if status is MessageStatus.NOT_FOUND:
            raise StorageError("update_status", "not_found is not a storable status")
        async with self._transaction("update_status") as session:
            result = await session.execute(
                update(MessageModel)
                .where(MessageModel.idempotency_id == idempotency_id)
                .values(status=status.value, updated_at=self._clock.now())
            )
            if result.rowcount == 0:
                raise StorageError("update_status", f"No message with idempotency_id '{idempotency_id}'")
            session.add(
                self._history_row(
                    HistoryEntry(
                        idempotency_id=idempotency_id,
                        correlation_id=correlation_id,
                        status=status,
                        service_name=service_name,
                        event_id=event_id,
                        error_message=error_message,
                    )
                )
            )

    def _history_row(self, entry: HistoryEntry) -> MessageHistoryModel:
        return MessageHistoryModel(
            idempotency_id=entry.idempotency_id,
            correlation_id=entry.correlation_id,
            status=entry.status.value,
            service_name=entry.service_name,
            event_id=entry.event_id,
            error_message=entry.error_message,
            created_at=entry.created_at or self._clock.now(),
        )


__all__ = ["SqlAlchemyMessageStore"]
