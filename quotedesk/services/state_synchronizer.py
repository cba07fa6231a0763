"""State Synchronizer — republishes the full collection after every mutation.

Invariants:
    - refresh() reloads the WHOLE collection from the store; never patches
    - publish() writes two keys: the live mirror and an independent deep copy
      ("original") used for dirty tracking by the presentation layer
    - Publishing the same collection twice is harmless (last-write-wins)
    - A failed reload is reported and leaves the previous mirror in place;
      it never fails the mutation that triggered it

Design Decisions:
    - Full refresh over incremental patches: a late publish from a slower
      operation is corrected by the next reload instead of leaving stale rows
    - Mirror only: never writes back to the store
"""

import copy
import logging

from quotedesk.core.domain_types import RecordKind
from quotedesk.core.repository_protocols import (
    FaultReporter, RecordStore, StatePublisher,
)

logger = logging.getLogger(__name__)


class StateSynchronizer:
    """Keeps one kind's read-mirror in step with the store."""

    def __init__(
        self,
        store: RecordStore,
        publisher: StatePublisher,
        reporter: FaultReporter,
        kind: RecordKind,
        live_key: str,
        original_key: str,
    ):
        self._store = store
        self._publisher = publisher
        self._reporter = reporter
        self.kind = kind
        self.live_key = live_key
        self.original_key = original_key

    def publish(self, records: list[dict]) -> None:
        self._publisher.set(self.live_key, list(records))
        self._publisher.set(self.original_key, copy.deepcopy(list(records)))

    async def refresh(self) -> list[dict] | None:
        """Reload from the store and publish. Returns None when the reload failed."""
        try:
            records = await self._store.load_all(self.kind)
        except Exception as e:
            logger.error(
                "Failed to refresh %s list: %s", self.kind.value, e,
                extra={"entity_kind": self.kind.value},
            )
            self._reporter.report(e, f"{self.kind.value} Refresh")
            return None
        self.publish(records)
        logger.debug(
            "Refreshed %s list: %d items", self.kind.value, len(records),
            extra={"entity_kind": self.kind.value},
        )
        return records
