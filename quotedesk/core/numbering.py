"""Numbering Policy — formatting and parsing of business-facing sequence numbers.

Invariants:
    - format_number(n) == prefix + str(n).zfill(padding)
    - parse_sequence(format_number(n)) == n for every n >= 1
    - default_start is the number issued first for an empty collection
    - Stateless: the counter value lives in the persisted counter row

Design Decisions:
    - Frozen dataclass validated in __post_init__: a bad policy fails at startup,
      not at the first record creation
    - parse_sequence returns None for foreign formats so seeding from legacy data
      ignores records it cannot read instead of failing
"""

import re
from dataclasses import dataclass

_TRAILING_DIGITS = re.compile(r"(\d+)\D*$")


@dataclass(frozen=True)
class NumberingPolicy:
    """How sequence numbers for one record kind are rendered."""
    prefix: str
    padding: int = 6
    start_at: int = 1

    def __post_init__(self):
        if not isinstance(self.prefix, str):
            raise ValueError("prefix must be a string.")
        if not isinstance(self.padding, int) or self.padding < 1:
            raise ValueError("padding must be int >= 1.")
        if not isinstance(self.start_at, int) or self.start_at < 1:
            raise ValueError("start_at must be int >= 1.")

    def format_number(self, sequence: int) -> str:
        if not isinstance(sequence, int) or sequence < 1:
            raise ValueError("sequence must be int >= 1.")
        return f"{self.prefix}{str(sequence).zfill(self.padding)}"

    def parse_sequence(self, number: object) -> int | None:
        """Numeric part of a number issued under this policy, else None."""
        if not isinstance(number, str) or not number.startswith(self.prefix):
            return None
        digits = number[len(self.prefix):]
        return int(digits) if digits.isdigit() else None

    @property
    def default_start(self) -> str:
        return self.format_number(self.start_at)


def sequence_of(number: object) -> int:
    """Best-effort numeric position of any sequence number; -1 if none."""
    if not isinstance(number, str):
        return -1
    match = _TRAILING_DIGITS.search(number)
    return int(match.group(1)) if match else -1
