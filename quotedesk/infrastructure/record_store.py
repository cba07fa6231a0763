"""SQL Record Store — RecordStore implementation over the stored_records table.

Invariants:
    - Every operation runs in its own session (one unit of work per call)
    - save() is an upsert keyed by record["id"]; a missing id is assigned (uuid4)
    - load() returns None for an absent id or an id stored under another kind
    - Returned dicts are deep copies: callers can never mutate stored state
    - Failures surface as PersistenceError (mapped by DatabaseSessionManager)

Design Decisions:
    - Failures flagged retryable by the session manager are retried
      store_retry_attempts times with a fixed pause; all others raise at once
    - load_all ordered by created_at then id so listings are stable
"""

import asyncio
import copy
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar
from uuid import uuid4

from sqlalchemy import delete, select

from quotedesk.core.domain_types import RecordKind
from quotedesk.core.errors import PersistenceError
from quotedesk.infrastructure.database import DatabaseSessionManager
from quotedesk.models.stored_record import StoredRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlRecordStore:
    """Persisted store for record documents, partitioned by RecordKind."""

    def __init__(
        self,
        db: DatabaseSessionManager,
        number_fields: dict[RecordKind, str],
        retry_attempts: int = 3,
        retry_delay_ms: int = 100,
    ):
        self._db = db
        self._number_fields = number_fields
        self._retry_attempts = max(1, retry_attempts)
        self._retry_delay = retry_delay_ms / 1000

    async def _with_retry(
        self, operation: Callable[[], Awaitable[T]], label: str,
    ) -> T:
        attempt = 1
        while True:
            try:
                return await operation()
            except PersistenceError as e:
                if attempt >= self._retry_attempts or not e.retryable:
                    raise
                logger.warning(
                    "Retrying %s after store failure (%d/%d)",
                    label, attempt, self._retry_attempts,
                    extra={"attempt": attempt},
                )
                await asyncio.sleep(self._retry_delay)
                attempt += 1

    async def save(self, kind: RecordKind, record: dict) -> dict:
        payload = copy.deepcopy(record)
        if not payload.get("id"):
            payload["id"] = str(uuid4())
        number = payload.get(self._number_fields.get(kind, ""))

        async def _save() -> dict:
            async with self._db.transaction(f"save {kind.value}") as db:
                row = await db.get(StoredRecord, payload["id"])
                if row is None:
                    row = StoredRecord(id=payload["id"], kind=kind.value)
                    db.add(row)
                row.kind = kind.value
                row.number = str(number) if number is not None else None
                row.payload = payload
            logger.debug(
                "Saved record", extra={"entity_kind": kind.value, "record_id": payload["id"]},
            )
            return copy.deepcopy(payload)

        return await self._with_retry(_save, f"save {kind.value}")

    async def load(self, kind: RecordKind, record_id: str) -> dict | None:
        async def _load() -> dict | None:
            async with self._db.session(f"load {kind.value}") as db:
                row = await db.get(StoredRecord, record_id)
                if row is None or row.kind != kind.value:
                    return None
                return copy.deepcopy(row.payload)

        return await self._with_retry(_load, f"load {kind.value}")

    async def load_all(self, kind: RecordKind) -> list[dict]:
        async def _load_all() -> list[dict]:
            async with self._db.session(f"load_all {kind.value}") as db:
                result = await db.execute(
                    select(StoredRecord)
                    .where(StoredRecord.kind == kind.value)
                    .order_by(StoredRecord.created_at, StoredRecord.id),
                )
                return [copy.deepcopy(r.payload) for r in result.scalars().all()]

        return await self._with_retry(_load_all, f"load_all {kind.value}")

    async def delete(self, kind: RecordKind, record_id: str) -> None:
        async def _delete() -> None:
            async with self._db.transaction(f"delete {kind.value}") as db:
                await db.execute(
                    delete(StoredRecord)
                    .where(StoredRecord.id == record_id)
                    .where(StoredRecord.kind == kind.value),
                )

        await self._with_retry(_delete, f"delete {kind.value}")
