"""SQL record store — upsert, kind partitioning, isolation and retry."""

from contextlib import asynccontextmanager

import pytest

from quotedesk.core.domain_types import RecordKind
from quotedesk.core.errors import PersistenceError
from quotedesk.infrastructure.record_store import SqlRecordStore
from quotedesk.services.wiring import NUMBER_FIELDS


class FlakySessionManager:
    """Wraps a DatabaseSessionManager; the first `failures` units of work fail."""

    def __init__(self, inner, failures: int, retryable: bool = True):
        self._inner = inner
        self.failures = failures
        self.retryable = retryable
        self.calls = 0

    def _maybe_fail(self, operation):
        self.calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise PersistenceError("down", operation, retryable=self.retryable)

    @asynccontextmanager
    async def session(self, operation="read"):
        self._maybe_fail(operation)
        async with self._inner.session(operation) as db:
            yield db

    @asynccontextmanager
    async def transaction(self, operation="write"):
        self._maybe_fail(operation)
        async with self._inner.transaction(operation) as db:
            yield db


async def test_save_assigns_missing_id(record_store):
    saved = await record_store.save(RecordKind.QUOTES, {"quote_number": "QT-000001"})
    assert saved["id"]
    assert await record_store.load(RecordKind.QUOTES, saved["id"]) == saved


async def test_save_is_an_upsert(record_store):
    await record_store.save(RecordKind.QUOTES, {"id": "q1", "client_name": "Acme"})
    await record_store.save(RecordKind.QUOTES, {"id": "q1", "client_name": "Globex"})

    records = await record_store.load_all(RecordKind.QUOTES)
    assert records == [{"id": "q1", "client_name": "Globex"}]


async def test_kinds_are_partitioned(record_store):
    await record_store.save(RecordKind.QUOTES, {"id": "q1"})
    assert await record_store.load(RecordKind.PC_NUMBERS, "q1") is None
    assert await record_store.load_all(RecordKind.PC_NUMBERS) == []


async def test_load_missing_returns_none(record_store):
    assert await record_store.load(RecordKind.QUOTES, "missing") is None


async def test_returned_records_are_copies(record_store):
    record = {"id": "q1", "items": [{"id": "i1"}]}
    saved = await record_store.save(RecordKind.QUOTES, record)
    saved["items"].append({"id": "i2"})
    record["items"].clear()

    loaded = await record_store.load(RecordKind.QUOTES, "q1")
    assert loaded["items"] == [{"id": "i1"}]


async def test_delete_removes_only_that_record(record_store):
    await record_store.save(RecordKind.QUOTES, {"id": "q1"})
    await record_store.save(RecordKind.QUOTES, {"id": "q2"})
    await record_store.delete(RecordKind.QUOTES, "q1")
    assert [r["id"] for r in await record_store.load_all(RecordKind.QUOTES)] == ["q2"]


async def test_transient_failures_are_retried(record_store, test_db_manager):
    await record_store.save(RecordKind.QUOTES, {"id": "q1"})
    flaky = FlakySessionManager(test_db_manager, failures=2)
    store = SqlRecordStore(flaky, NUMBER_FIELDS, retry_attempts=3, retry_delay_ms=0)

    assert len(await store.load_all(RecordKind.QUOTES)) == 1
    assert flaky.calls == 3


async def test_retries_are_bounded(test_db_manager):
    flaky = FlakySessionManager(test_db_manager, failures=5)
    store = SqlRecordStore(flaky, NUMBER_FIELDS, retry_attempts=3, retry_delay_ms=0)

    with pytest.raises(PersistenceError):
        await store.load(RecordKind.QUOTES, "q1")
    assert flaky.calls == 3


async def test_non_retryable_failures_raise_at_once(test_db_manager):
    flaky = FlakySessionManager(test_db_manager, failures=1, retryable=False)
    store = SqlRecordStore(flaky, NUMBER_FIELDS, retry_attempts=3, retry_delay_ms=0)

    with pytest.raises(PersistenceError):
        await store.save(RecordKind.QUOTES, {"id": "q1"})
    assert flaky.calls == 1
