"""State Store — explicit, injected key/value context shared with the presentation layer.

Invariants:
    - set() is last-write-wins; no transactions, no merging
    - get() returns the default for unknown keys (never raises)
    - Subscribers for a key are called synchronously after every set() of that key
    - A failing subscriber is logged and skipped; it never aborts the set()
    - clear() drops all values and subscribers (shutdown / test teardown)

Design Decisions:
    - One instance per application, created in the lifespan and passed to every
      service — replaces process-wide globals so dependencies stay visible
    - Dot-notation keys ("data.all_quotes") kept as plain strings: the store
      does not interpret them
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

Subscriber = Callable[[Any, Any], None]

# Keys read by the services themselves
CURRENT_USER_KEY = "app.current_user"
COMPANIES_KEY = "data.all_companies"


@dataclass
class StateStore:
    """Per-application state mirror — pure in-memory, no IO."""

    _values: dict[str, Any] = field(default_factory=dict)
    _subscribers: dict[str, list[Subscriber]] = field(default_factory=dict)

    def set(self, key: str, value: Any) -> None:
        old = self._values.get(key)
        self._values[key] = value
        for callback in list(self._subscribers.get(key, [])):
            try:
                callback(value, old)
            except Exception as e:
                logger.error("State subscriber for '%s' failed: %s", key, e)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def subscribe(self, key: str, callback: Subscriber) -> Callable[[], None]:
        """Register callback(value, old_value); returns an unsubscribe function."""
        self._subscribers.setdefault(key, []).append(callback)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(key, [])
            if callback in callbacks:
                callbacks.remove(callback)
            if not callbacks:
                self._subscribers.pop(key, None)

        return unsubscribe

    def keys(self) -> list[str]:
        return sorted(self._values)

    def clear(self) -> None:
        self._values.clear()
        self._subscribers.clear()
