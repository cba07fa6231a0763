"""Boundary Protocols — contracts between the record services and their collaborators.

Invariants:
    - Services NEVER import concrete infrastructure — they receive these Protocols
    - RecordStore.load returns None for a missing id (the not-found sentinel)
    - SequenceCounter.next is atomic per kind: no two calls observe the same value
    - FaultReporter.report never raises

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no base class
    - Records cross the boundary as plain dicts (JSON documents)
"""

from typing import Any, Protocol

from quotedesk.core.domain_types import RecordKind


class RecordStore(Protocol):
    """Durable storage for record documents — implemented by infrastructure."""
    async def save(self, kind: RecordKind, record: dict) -> dict: ...
    async def load(self, kind: RecordKind, record_id: str) -> dict | None: ...
    async def load_all(self, kind: RecordKind) -> list[dict]: ...
    async def delete(self, kind: RecordKind, record_id: str) -> None: ...


class SequenceCounter(Protocol):
    """Persisted, atomic per-kind counter returning formatted numbers."""
    async def next(self, kind: RecordKind) -> str: ...


class FaultReporter(Protocol):
    """Side-effecting fault sink (logging, history). Never raises."""
    def report(self, error: BaseException, context_label: str) -> None: ...


class StatePublisher(Protocol):
    """Keyed, last-write-wins state shared with the presentation layer."""
    def set(self, key: str, value: Any) -> None: ...
    def get(self, key: str, default: Any = None) -> Any: ...
