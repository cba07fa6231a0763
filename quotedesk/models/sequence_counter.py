"""SequenceCounter ORM — the persisted last-issued value per record kind.

Invariants:
    - One row per kind (kind is the primary key)
    - last_value only ever increases; it is never decremented on record deletion
"""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from quotedesk.db.base import Base


class SequenceCounterRow(Base):
    """Counter row for one record kind."""
    __tablename__ = "sequence_counters"

    kind: Mapped[str] = mapped_column(String(30), primary_key=True)
    last_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
