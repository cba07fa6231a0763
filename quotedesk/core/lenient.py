"""Lenient Numbers — the single numeric coercion used for derived values.

Invariants:
    - to_number never raises: missing, malformed or non-finite input -> 0.0
    - is_finite_number is the strict counterpart used by validation

Design Decisions:
    - One utility instead of per-call guards so totals, statistics and
      validation agree on what "numeric" means
    - Booleans are not numbers here (True would otherwise count as 1)
"""

import math


def _coerce(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def to_number(value: object) -> float:
    """Parse value as a float, substituting 0.0 for anything unusable."""
    number = _coerce(value)
    return 0.0 if number is None else number


def is_finite_number(value: object) -> bool:
    """True when value parses to a finite float."""
    return _coerce(value) is not None
