"""Unit tests for MessageStatusReader and StatusView."""
from __future__ import annotations

import asyncio
from typing import Any

import pytest

from message_gateway.application import MessageStatusReader
from message_gateway.kernel.errors import StorageError
from message_gateway.kernel.messaging import MessageStatus
from message_gateway.testing import FakeClock, InMemoryMessageStore


def _run(coro: Any) -> Any:
    return asyncio.run(coro)


def _seeded_store() -> InMemoryMessageStore:
    clock = FakeClock()
    store = InMemoryMessageStore(clock)

    async def seed() -> None:
        await store.upsert_pending("idem-1", "corr-1", {"content": "x", "metadata": {}})
        clock.advance(seconds=1)
        await store.update_status("idem-1", "corr-1", MessageStatus.PROCESSING, "message-processor", "evt-1")
        clock.advance(seconds=1)
        await store.update_status(
            "idem-1", "corr-1", MessageStatus.FAILED, "message-processor", "evt-1", error_message="boom"
        )

    _run(seed())
    return store


class TestMessageStatusReader:
    def test_unknown_id_is_not_found(self) -> None:
        view = _run(MessageStatusReader(InMemoryMessageStore()).get_status("missing"))
        assert view.status is MessageStatus.NOT_FOUND
        assert not view.found
        assert view.to_dict() == {"id": "missing", "status": "not_found"}

    def test_reports_current_status_and_history(self) -> None:
        view = _run(MessageStatusReader(_seeded_store()).get_status("idem-1"))
        assert view.found
        assert view.status is MessageStatus.FAILED
        assert view.correlation_id == "corr-1"
        assert [h.status for h in view.history] == [MessageStatus.PROCESSING, MessageStatus.FAILED]

    def test_to_dict_shape(self) -> None:
        body = _run(MessageStatusReader(_seeded_store()).get_status("idem-1")).to_dict()
        assert body["id"] == "idem-1"
        assert body["status"] == "failed"
        assert body["created_at"] == "2026-01-01T12:00:00Z"
        assert body["updated_at"] == "2026-01-01T12:00:02Z"
        assert body["history"] == [
            {
                "status": "processing",
                "service": "message-processor",
                "event_id": "evt-1",
                "error": None,
                "timestamp": "2026-01-01T12:00:01Z",
            },
            {
                "status": "failed",
                "service": "message-processor",
                "event_id": "evt-1",
                "error": "boom",
                "timestamp": "2026-01-01T12:00:02Z",
            },
        ]

    def test_read_does_not_modify_store(self) -> None:
        store = _seeded_store()
        before = list(store.records)
        _run(MessageStatusReader(store).get_status("idem-1"))
        _run(MessageStatusReader(store).get_status("missing"))
        assert store.records == before
        assert store.upsert_calls == 1

    def test_store_failure_propagates(self) -> None:
        store = InMemoryMessageStore()
        store.fail_with = ConnectionError("db down")
        with pytest.raises(StorageError):
            _run(MessageStatusReader(store).get_status("idem-1"))
