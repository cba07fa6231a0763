"""ORM Models — SQLAlchemy declarative models for persisted records and counters.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from quotedesk.models.stored_record import StoredRecord  # noqa: F401
from quotedesk.models.sequence_counter import SequenceCounterRow  # noqa: F401
