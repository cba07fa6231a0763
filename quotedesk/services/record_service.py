"""Record Service — lifecycle orchestration shared by every record kind.

Invariants:
    - Writes are validated in full before the store is touched (no partial writes)
    - create: number -> defaults merged with caller fields -> validate -> derive
      -> save -> refresh mirror
    - update: load -> shallow merge -> stamp last_modified_at/edited_by ->
      validate -> derive -> save -> refresh mirror
    - id, the sequence-number field and created_at are never taken from caller
      input (assigned once at creation)
    - Read/list paths report faults and return a safe default
    - create/update/get_by_id report and re-raise; delete reports and returns False
    - Each fault is reported once, by the public operation that failed; the
      private helpers (_load_existing, _apply_patch) never report

Design Decisions:
    - One generic service parameterized by RecordKindConfig: quotes and PC
      numbers differ in rules and fields, not in lifecycle
    - update is load-merge-save with last-write-wins: two overlapping updates
      to the same record both read the same snapshot and the later save wins
    - _derive hook lets a kind recompute derived fields on every write
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from quotedesk.core.domain_types import (
    DEFAULT_RECENT_LIMIT, SEARCH_ALL, RecordKind,
)
from quotedesk.core.errors import (
    ErrorContext, RecordValidationError, ResourceNotFoundError,
)
from quotedesk.core.record_stats import empty_statistics, summarize_records
from quotedesk.core.recent_records import recent_records
from quotedesk.core.repository_protocols import (
    FaultReporter, RecordStore, StatePublisher,
)
from quotedesk.core.search_records import filter_records
from quotedesk.core.state_store import CURRENT_USER_KEY
from quotedesk.services.sequence_generator import SequenceNumberGenerator
from quotedesk.services.state_synchronizer import StateSynchronizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordKindConfig:
    """Everything that distinguishes one record kind from another."""
    kind: RecordKind
    label: str
    number_field: str
    statuses: type[Enum]
    default_status: Enum
    value_field: str
    validator: Callable[[dict], list[str]]
    live_key: str
    original_key: str
    current_key: str
    search_aliases: dict[str, tuple[str, ...]] = field(default_factory=dict)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class RecordService:
    """CRUD + query surface for one record kind."""

    def __init__(
        self,
        config: RecordKindConfig,
        store: RecordStore,
        sequence: SequenceNumberGenerator,
        reporter: FaultReporter,
        state: StatePublisher,
        synchronizer: StateSynchronizer,
        clock: Callable[[], str] = utc_now,
    ):
        self.config = config
        self._store = store
        self._sequence = sequence
        self._reporter = reporter
        self._state = state
        self._synchronizer = synchronizer
        self._clock = clock

    # ─── Hooks ──────────────────────────────────────────────────

    def _defaults(self) -> dict:
        return {}

    def _derive(self, record: dict) -> dict:
        return record

    # ─── Helpers ────────────────────────────────────────────────

    def _writable(self, fields: dict) -> dict:
        immutable = {"id", "created_at", self.config.number_field}
        return {k: v for k, v in fields.items() if k not in immutable}

    def _normalize(self, record: dict) -> dict:
        status = record.get("status")
        if isinstance(status, Enum):
            record["status"] = status.value
        return record

    def _check(self, record: dict) -> None:
        violations = self.config.validator(record)
        if violations:
            raise RecordValidationError(
                violations,
                ErrorContext(
                    entity_kind=self.config.kind.value,
                    record_id=record.get("id"),
                ),
            )

    def _not_found(self, record_id: str) -> ResourceNotFoundError:
        return ResourceNotFoundError(
            self.config.label, record_id,
            ErrorContext(entity_kind=self.config.kind.value, record_id=record_id),
        )

    def _log_extra(self, record: dict) -> dict:
        return {"entity_kind": self.config.kind.value, "record_id": record.get("id")}

    # ─── Mutations ──────────────────────────────────────────────

    async def create(self, fields: dict) -> dict:
        """Allocate a number, build with defaults, validate, persist, republish."""
        cfg = self.config
        try:
            number = await self._sequence.next(cfg.kind)
            now = self._clock()
            record = {
                "id": str(uuid4()),
                cfg.number_field: number,
                "created_at": now,
                "last_modified_at": now,
                "status": cfg.default_status.value,
                **self._defaults(),
                **self._writable(fields),
            }
            record = self._normalize(record)
            self._check(record)
            saved = await self._store.save(cfg.kind, self._derive(record))
            logger.info(f"Created {cfg.label}: {number}", extra=self._log_extra(saved))
            await self._synchronizer.refresh()
            return saved
        except Exception as e:
            self._reporter.report(e, f"{cfg.label} Creation")
            raise

    async def _load_existing(self, record_id: str) -> dict:
        existing = await self._store.load(self.config.kind, record_id)
        if existing is None:
            raise self._not_found(record_id)
        return existing

    async def _apply_patch(self, existing: dict, patch: dict) -> dict:
        """Merge, stamp, validate, derive, save and republish. Does not report."""
        cfg = self.config
        merged = {
            **existing,
            **self._writable(patch),
            "last_modified_at": self._clock(),
            "edited_by": self._state.get(CURRENT_USER_KEY) or "unknown",
        }
        merged = self._normalize(merged)
        self._check(merged)
        saved = await self._store.save(cfg.kind, self._derive(merged))
        logger.info(
            f"Updated {cfg.label}: {existing.get(cfg.number_field)}",
            extra=self._log_extra(saved),
        )
        await self._synchronizer.refresh()
        return saved

    async def update(self, record_id: str, patch: dict) -> dict:
        """Load-merge-save. Last write wins when updates to one record overlap."""
        try:
            existing = await self._load_existing(record_id)
            return await self._apply_patch(existing, patch)
        except Exception as e:
            self._reporter.report(e, f"{self.config.label} Update")
            raise

    async def delete(self, record_id: str) -> bool:
        """Remove a record. Returns False (after reporting) on any failure."""
        cfg = self.config
        try:
            existing = await self._load_existing(record_id)
            await self._store.delete(cfg.kind, record_id)
            logger.info(
                f"Deleted {cfg.label}: {existing.get(cfg.number_field)}",
                extra=self._log_extra(existing),
            )
            await self._synchronizer.refresh()
            return True
        except Exception as e:
            self._reporter.report(e, f"{cfg.label} Deletion")
            return False

    # ─── Reads ──────────────────────────────────────────────────

    async def get_by_id(self, record_id: str) -> dict:
        """Raises ResourceNotFoundError for an absent id."""
        try:
            return await self._load_existing(record_id)
        except Exception as e:
            self._reporter.report(e, f"{self.config.label} Retrieval")
            raise

    async def get_all(self) -> list[dict]:
        try:
            return await self._store.load_all(self.config.kind)
        except Exception as e:
            self._reporter.report(e, f"{self.config.label} List Retrieval")
            return []

    async def search(self, query: str | None, field: str = SEARCH_ALL) -> list[dict]:
        try:
            records = await self._store.load_all(self.config.kind)
            return filter_records(records, query, field, self.config.search_aliases)
        except Exception as e:
            self._reporter.report(e, f"{self.config.label} Search")
            return []

    async def get_by_status(self, status: str | Enum) -> list[dict]:
        wanted = status.value if isinstance(status, Enum) else status
        try:
            records = await self._store.load_all(self.config.kind)
            return [r for r in records if r.get("status") == wanted]
        except Exception as e:
            self._reporter.report(e, f"{self.config.label} Status Filter")
            return []

    async def get_recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[dict]:
        try:
            records = await self._store.load_all(self.config.kind)
            return recent_records(records, limit, self.config.number_field)
        except Exception as e:
            self._reporter.report(e, f"Recent {self.config.label} Retrieval")
            return []

    async def get_statistics(self) -> dict:
        cfg = self.config
        try:
            records = await self._store.load_all(cfg.kind)
            return summarize_records(records, cfg.statuses, cfg.value_field)
        except Exception as e:
            self._reporter.report(e, f"{cfg.label} Statistics")
            return empty_statistics(cfg.statuses)

    # ─── Current record (presentation state) ────────────────────

    def set_current(self, record: dict | None) -> None:
        self._state.set(self.config.current_key, record)

    def get_current(self) -> dict | None:
        return self._state.get(self.config.current_key)

    def clear_current(self) -> None:
        self._state.set(self.config.current_key, None)
