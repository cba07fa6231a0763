"""Fault Reporter — logs reported faults and keeps a bounded history.

Invariants:
    - report() never raises, whatever it is handed
    - History holds at most max_history entries (oldest dropped first)
    - Recoverable QuoteDeskErrors log at WARNING, everything else at ERROR

Design Decisions:
    - Structured extras (error_code, context_label) so JSONFormatter surfaces them
    - History kept in-process for the presentation layer's diagnostics panel;
      it is not persisted
"""

import logging
from collections import deque
from datetime import datetime, timezone
from uuid import uuid4

from quotedesk.core.errors import QuoteDeskError

logger = logging.getLogger(__name__)


class LoggingFaultReporter:
    """FaultReporter that writes to the application log."""

    def __init__(self, max_history: int = 100):
        self._history: deque[dict] = deque(maxlen=max_history)
        self.fault_count = 0

    def report(self, error: BaseException, context_label: str) -> None:
        try:
            self._record(error, context_label)
        except Exception as e:
            logger.error("Fault reporter failed for '%s': %r", context_label, e)

    def _record(self, error: BaseException, context_label: str) -> None:
        self.fault_count += 1
        code = getattr(error, "code", type(error).__name__)
        recoverable = isinstance(error, QuoteDeskError) and error.recoverable
        entry = {
            "id": uuid4().hex[:12],
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "context_label": context_label,
            "error_code": code,
            "message": str(error),
            "recoverable": recoverable,
        }
        self._history.append(entry)
        log = logger.warning if recoverable else logger.error
        log(
            "[%s] %s", context_label, error,
            extra={"error_code": code, "context_label": context_label},
        )

    @property
    def history(self) -> list[dict]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
