"""SQLAlchemy adapter – SqlAlchemyOutboxRepository."""
from __future__ import annotations

from typing import Any

from sqlalchemy import select, update

from message_gateway.adapters.sqlalchemy.models import OutboxModel
from message_gateway.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from message_gateway.kernel.messaging import OutboxRecord, OutboxRepository, OutboxStatus
from message_gateway.kernel.time import Clock, SystemClock, as_utc


class SqlAlchemyOutboxRepository(OutboxRepository):
    """SQLAlchemy-backed outbox repository."""

    def __init__(self, session_factory: SqlAlchemySessionFactory, clock: Clock | None = None) -> None:
        self._factory = session_factory
        self._clock = clock or SystemClock()

    async def get_pending(self, limit: int = 100) -> list[OutboxRecord]:
        async with self._factory.transaction("outbox.get_pending") as session:
            result = await session.execute(
                select(OutboxModel)
                .where(OutboxModel.status == OutboxStatus.PENDING.value)
                .order_by(OutboxModel.created_at.asc())
                .limit(limit)
            )
            return [self._row_to_record(row) for row in result.scalars().all()]

    async def mark_dispatched(self, record_id: str) -> None:
        await self._update(
            "outbox.mark_dispatched",
            record_id,
            {"status": OutboxStatus.DISPATCHED.value, "dispatched_at": self._clock.now()},
        )

    async def mark_failed(self, record_id: str, error: str, *, final: bool) -> None:
        values: dict[str, Any] = {"attempts": OutboxModel.attempts + 1, "last_error": error}
        if final:
            values["status"] = OutboxStatus.FAILED.value
        await self._update("outbox.mark_failed", record_id, values)

    async def _update(self, operation: str, record_id: str, values: dict[str, Any]) -> None:
        async with self._factory.transaction(operation) as session:
            await session.execute(update(OutboxModel).where(OutboxModel.id == record_id).values(**values))

    def _row_to_record(self, row: OutboxModel) -> OutboxRecord:
        return OutboxRecord(
            id=row.id,
            idempotency_id=row.idempotency_id,
            event_type=row.event_type,
            channel=row.channel,
            payload=dict(row.payload),
            headers=dict(row.headers or {}),
            status=OutboxStatus(row.status),
            attempts=row.attempts,
            last_error=row.last_error,
            created_at=as_utc(row.created_at),
            dispatched_at=as_utc(row.dispatched_at) if row.dispatched_at else None,
        )


__all__ = ["SqlAlchemyOutboxRepository"]
