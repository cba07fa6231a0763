"""Recent Records — newest-first ordering with a deterministic tie-break.

Invariants:
    - Sorted by created_at descending
    - Equal timestamps: higher sequence number first, then id descending
    - Unparseable created_at sorts last
    - limit <= 0 returns an empty list
"""

from datetime import datetime, timezone

from quotedesk.core.numbering import sequence_of

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: object) -> datetime:
    """ISO-8601 string or datetime -> aware datetime; anything else -> oldest."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return _OLDEST
    else:
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def recent_records(
    records: list[dict], limit: int, number_field: str,
) -> list[dict]:
    """First `limit` records by descending creation time."""
    if limit <= 0:
        return []
    ordered = sorted(
        records,
        key=lambda r: (
            parse_timestamp(r.get("created_at")),
            sequence_of(r.get(number_field)),
            str(r.get("id", "")),
        ),
        reverse=True,
    )
    return ordered[:limit]
