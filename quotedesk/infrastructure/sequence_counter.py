"""SQL Sequence Counter — atomic read-increment-write of per-kind counters.

Invariants:
    - The read and the write happen inside ONE critical section: an asyncio.Lock
      held across a single database transaction
    - Two overlapping next() calls never observe the same pre-increment value
    - Values only increase; deleting records never rewinds the counter
    - First allocation for a kind seeds the row from the highest number already
      stored for that kind (or start_at - 1 when there is none)

Design Decisions:
    - Lock in-process plus SELECT ... FOR UPDATE on the row: the lock covers
      interleaved coroutines, the row lock covers other processes on PostgreSQL
      (SQLite ignores FOR UPDATE and serializes writers itself)
    - Counter persisted separately from records so numbers survive deletion
"""

import asyncio
import logging

from sqlalchemy import select

from quotedesk.core.domain_types import RecordKind
from quotedesk.core.numbering import NumberingPolicy
from quotedesk.infrastructure.database import DatabaseSessionManager
from quotedesk.models.sequence_counter import SequenceCounterRow
from quotedesk.models.stored_record import StoredRecord

logger = logging.getLogger(__name__)


class SqlSequenceCounter:
    """Persisted counter issuing formatted sequence numbers per RecordKind."""

    def __init__(
        self,
        db: DatabaseSessionManager,
        policies: dict[RecordKind, NumberingPolicy],
    ):
        self._db = db
        self._policies = policies
        self._lock = asyncio.Lock()

    async def _highest_issued(self, db, kind: RecordKind, policy: NumberingPolicy) -> int:
        result = await db.execute(
            select(StoredRecord.number).where(StoredRecord.kind == kind.value),
        )
        parsed = (policy.parse_sequence(n) for n in result.scalars().all())
        return max((n for n in parsed if n is not None), default=0)

    async def next(self, kind: RecordKind) -> str:
        policy = self._policies[kind]
        async with self._lock:
            async with self._db.transaction(f"next {kind.value}") as db:
                row = await db.get(
                    SequenceCounterRow, kind.value, with_for_update=True,
                )
                if row is None:
                    highest = await self._highest_issued(db, kind, policy)
                    row = SequenceCounterRow(
                        kind=kind.value,
                        last_value=max(highest, policy.start_at - 1),
                    )
                    db.add(row)
                row.last_value += 1
                value = row.last_value
        number = policy.format_number(value)
        logger.debug(
            "Issued sequence number %s", number, extra={"entity_kind": kind.value},
        )
        return number
