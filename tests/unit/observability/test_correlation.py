"""Unit tests for RequestContext and CorrelationContext."""
from __future__ import annotations

import asyncio

import pytest

from message_gateway.observability.correlation import (
    CORRELATION_HEADER,
    REQUEST_ID_HEADER,
    CorrelationContext,
    RequestContext,
)


@pytest.fixture(autouse=True)
def _clear():
    CorrelationContext.clear()
    yield
    CorrelationContext.clear()


class TestRequestContext:
    def test_new_generates_id(self) -> None:
        a, b = RequestContext.new(), RequestContext.new()
        assert a.correlation_id and a.correlation_id != b.correlation_id
        assert a.idempotency_id is None

    def test_with_idempotency_id_returns_copy(self) -> None:
        ctx = RequestContext(correlation_id="corr-1")
        bound = ctx.with_idempotency_id("idem-1")
        assert bound.idempotency_id == "idem-1"
        assert ctx.idempotency_id is None


class TestCorrelationContext:
    def test_get_is_none_by_default(self) -> None:
        assert CorrelationContext.get() is None

    def test_get_or_new_is_stable(self) -> None:
        first = CorrelationContext.get_or_new()
        assert CorrelationContext.get_or_new() is first

    def test_correlation_header_wins(self) -> None:
        ctx = CorrelationContext.set_from_headers({CORRELATION_HEADER: "c-1", REQUEST_ID_HEADER: "r-1"})
        assert ctx.correlation_id == "c-1"
        assert CorrelationContext.get() == ctx

    def test_request_id_fallback_case_insensitive(self) -> None:
        ctx = CorrelationContext.set_from_headers({"x-request-id": "r-1"})
        assert ctx.correlation_id == "r-1"

    def test_blank_headers_generate_id(self) -> None:
        ctx = CorrelationContext.set_from_headers({CORRELATION_HEADER: "", REQUEST_ID_HEADER: ""})
        assert ctx.correlation_id

    def test_isolated_between_tasks(self) -> None:
        async def worker(value: str) -> str:
            CorrelationContext.set(RequestContext(correlation_id=value))
            await asyncio.sleep(0)
            return CorrelationContext.get().correlation_id  # type: ignore[union-attr]

        async def run() -> list[str]:
            return list(await asyncio.gather(worker("a"), worker("b")))

        assert asyncio.run(run()) == ["a", "b"]
