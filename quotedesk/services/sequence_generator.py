"""Sequence Number Generator — per-kind numbers with a reported fallback.

Invariants:
    - Delegates allocation to the SequenceCounter (atomic per kind)
    - On counter failure: reports SequenceGenerationError and returns the
      policy's default start; never raises
    - The fallback may collide with an issued number; that risk is surfaced
      through the reported WARNING rather than hidden
"""

import logging

from quotedesk.core.domain_types import RecordKind
from quotedesk.core.errors import SequenceGenerationError
from quotedesk.core.numbering import NumberingPolicy
from quotedesk.core.repository_protocols import FaultReporter, SequenceCounter

logger = logging.getLogger(__name__)


class SequenceNumberGenerator:
    """Issues business-facing numbers for each record kind."""

    def __init__(
        self,
        counter: SequenceCounter,
        policies: dict[RecordKind, NumberingPolicy],
        reporter: FaultReporter,
    ):
        self._counter = counter
        self._policies = policies
        self._reporter = reporter

    async def next(self, kind: RecordKind) -> str:
        try:
            return await self._counter.next(kind)
        except Exception as e:
            fallback = self._policies[kind].default_start
            fault = SequenceGenerationError(kind.value, fallback, str(e))
            fault.__cause__ = e
            self._reporter.report(fault, f"{kind.value} Number Generation")
            return fallback
