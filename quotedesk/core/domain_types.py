"""Domain Types — record kinds, status enums and search sentinels.

Invariants:
    - Every persisted record belongs to exactly one RecordKind
    - All valid statuses encoded as Enums — no raw string matching in logic
    - SEARCH_ALL is the only sentinel that widens search to every attribute

Design Decisions:
    - str Enums: serialize to JSON without custom encoders, compare equal to
      the raw values stored in record payloads
"""

from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class RecordKind(str, Enum):
    """Persisted collections — value is the store name."""
    QUOTES = "quotes"
    PC_NUMBERS = "pc_numbers"

class QuoteStatus(str, Enum):
    """Quote lifecycle states."""
    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"

class PcStatus(str, Enum):
    """Project record (PC number) states."""
    ACTIVE = "active"
    COMPLETED = "completed"
    DRAFT = "draft"
    URGENT = "urgent"

# ─── Constants ───────────────────────────────────────────────────

SEARCH_ALL = "all"
DEFAULT_RECENT_LIMIT = 10

TITLE_MAX = 200
NAME_MAX = 100
