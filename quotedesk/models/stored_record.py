"""StoredRecord ORM — one JSON document per record, partitioned by kind.

Invariants:
    - id is the record's own string id (uuid4), primary key
    - kind is a RecordKind value; every query filters on it
    - payload holds the full record dict exactly as the service built it
    - number mirrors the record's sequence number (seeding the counter reads it)

Design Decisions:
    - JSON payload over one column per field: records carry free-form caller
      fields, and the service layer owns the shape
    - number and created_at denormalized out of payload: counter seeding and
      stable ordering without parsing JSON in SQL
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from quotedesk.db.base import Base


class StoredRecord(Base):
    """Record document — a quote or PC number payload."""
    __tablename__ = "stored_records"
    __table_args__ = (Index("ix_stored_records_kind", "kind"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    kind: Mapped[str] = mapped_column(String(30), nullable=False)
    number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
