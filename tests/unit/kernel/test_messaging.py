"""Unit tests for the Event contract, serializer and publisher lifecycle."""
from __future__ import annotations

import asyncio
import dataclasses
import json
from typing import Any

import pytest

from message_gateway.kernel.errors import LifecycleError, PublishError, ValidationError
from message_gateway.kernel.messaging import (
    HEADER_ERROR,
    MESSAGE_CREATED,
    Event,
    JsonEventSerializer,
    OutboxRecord,
    OutboxStatus,
    PublisherState,
    dead_letter_channel,
)
from message_gateway.testing import InMemoryEventPublisher


def _run(coro: Any) -> Any:
    return asyncio.run(coro)


def _event(**overrides: Any) -> Event:
    event = Event.create(
        MESSAGE_CREATED,
        correlation_id="corr-1",
        idempotency_id="idem-1",
        source_service="api-gateway",
        payload={"content": "hello", "metadata": {"x": 1}},
    )
    return dataclasses.replace(event, **overrides) if overrides else event


# ---------------------------------------------------------------------------
# Event
# ---------------------------------------------------------------------------


class TestEvent:
    def test_create_fills_identity_and_timestamp(self) -> None:
        event = _event()
        assert event.event_id
        assert event.timestamp.endswith("Z")
        assert event.event_type == "message.created"

    def test_each_event_gets_its_own_id(self) -> None:
        assert _event().event_id != _event().event_id

    def test_routing_headers(self) -> None:
        assert _event().routing_headers() == {
            "correlation_id": "corr-1",
            "idempotency_id": "idem-1",
            "event_type": "message.created",
        }

    @pytest.mark.parametrize(
        "field", ["event_id", "correlation_id", "idempotency_id", "event_type", "source_service", "timestamp"]
    )
    def test_validate_rejects_empty_field(self, field: str) -> None:
        with pytest.raises(ValidationError) as info:
            _event(**{field: ""}).validate()
        assert info.value.errors[0]["field"] == field

    def test_from_dict_missing_fields(self) -> None:
        with pytest.raises(ValidationError) as info:
            Event.from_dict({"event_id": "e"})
        fields = {e["field"] for e in info.value.errors}
        assert "correlation_id" in fields and "timestamp" in fields

    def test_from_dict_rejects_non_mapping(self) -> None:
        with pytest.raises(ValidationError):
            Event.from_dict(["not", "an", "object"])  # type: ignore[arg-type]

    def test_from_dict_rejects_non_object_payload(self) -> None:
        data = _event().to_dict()
        data["payload"] = "text"
        with pytest.raises(ValidationError):
            Event.from_dict(data)


class TestJsonEventSerializer:
    def test_body_carries_every_field(self) -> None:
        event = _event()
        body = json.loads(JsonEventSerializer().serialize(event))
        assert body == event.to_dict()

    def test_deserialize_reconstructs_event(self) -> None:
        ser = JsonEventSerializer()
        event = _event()
        assert ser.deserialize(ser.serialize(event)) == event

    def test_invalid_json_is_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            JsonEventSerializer().deserialize(b"{not json")

    def test_content_type(self) -> None:
        assert JsonEventSerializer.content_type == "application/json"


# ---------------------------------------------------------------------------
# EventPublisher lifecycle (through the in-memory implementation)
# ---------------------------------------------------------------------------


class TestPublisherLifecycle:
    def test_starts_uninitialized(self) -> None:
        assert InMemoryEventPublisher().state is PublisherState.UNINITIALIZED

    def test_publish_before_connect_raises(self) -> None:
        pub = InMemoryEventPublisher()
        with pytest.raises(PublishError, match="not connected"):
            _run(pub.publish("message.created", _event()))
        assert pub.sent == []

    def test_connect_reaches_ready(self) -> None:
        pub = InMemoryEventPublisher()
        _run(pub.connect())
        assert pub.state is PublisherState.READY
        assert pub.is_ready

    def test_connect_twice_opens_once(self) -> None:
        pub = InMemoryEventPublisher()

        async def run() -> None:
            await pub.connect()
            await pub.connect()

        _run(run())
        assert pub.open_calls == 1

    def test_failed_connect_returns_to_uninitialized(self) -> None:
        pub = InMemoryEventPublisher()
        pub.fail_on_connect = True
        with pytest.raises(PublishError):
            _run(pub.connect())
        assert pub.state is PublisherState.UNINITIALIZED
        assert pub.release_calls == 1

    def test_close_is_idempotent(self) -> None:
        pub = InMemoryEventPublisher()

        async def run() -> None:
            await pub.connect()
            await pub.close()
            await pub.close()

        _run(run())
        assert pub.state is PublisherState.CLOSED
        assert pub.release_calls == 1

    def test_connect_after_close_raises(self) -> None:
        pub = InMemoryEventPublisher()

        async def run() -> None:
            await pub.connect()
            await pub.close()
            await pub.connect()

        with pytest.raises(LifecycleError):
            _run(run())

    def test_publish_after_close_raises(self) -> None:
        pub = InMemoryEventPublisher()

        async def run() -> None:
            async with pub:
                pass
            await pub.publish("message.created", _event())

        with pytest.raises(PublishError):
            _run(run())

    def test_invalid_event_is_publish_error(self) -> None:
        pub = InMemoryEventPublisher()

        async def run() -> None:
            async with pub:
                await pub.publish("message.created", _event(correlation_id=""))

        with pytest.raises(PublishError) as info:
            _run(run())
        assert isinstance(info.value.cause, ValidationError)
        assert pub.sent == []

    def test_publish_sends_body_and_headers(self) -> None:
        pub = InMemoryEventPublisher()
        event = _event()

        async def run() -> None:
            async with pub:
                await pub.publish("message.created", event)

        _run(run())
        channel, sent, body, headers = pub.sent[0]
        assert channel == "message.created"
        assert sent == event
        assert json.loads(body)["idempotency_id"] == "idem-1"
        assert headers == event.routing_headers()

    def test_dead_letter_adds_error_header(self) -> None:
        pub = InMemoryEventPublisher()
        event = _event()

        async def run() -> None:
            async with pub:
                await pub.publish_to_dead_letter("message.created", event, "boom")

        _run(run())
        assert pub.of_channel("message.created.dlq") == [event]
        assert pub.headers_for(event.event_id)[HEADER_ERROR] == "boom"

    def test_dead_letter_channel_name(self) -> None:
        assert dead_letter_channel("orders") == "orders.dlq"


class TestOutboxRecord:
    def test_for_event_round_trips_event(self) -> None:
        event = _event()
        record = OutboxRecord.for_event("message.created", event)
        assert record.id == event.event_id
        assert record.status is OutboxStatus.PENDING
        assert record.headers == event.routing_headers()
        assert record.to_event() == event
