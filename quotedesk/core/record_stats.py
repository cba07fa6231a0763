"""Record Stats — pure single-pass summary of a record collection.

Invariants:
    - No IO; input records are never mutated
    - counts_by_status has one key per enum member, even when zero
    - Unknown statuses count toward total but not toward any status bucket
    - average_value is 0.0 when the collection is empty (no ZeroDivisionError)
    - Values are summed leniently: non-numeric counts as 0
"""

from enum import Enum

from quotedesk.core.lenient import to_number


def empty_statistics(statuses: type[Enum]) -> dict:
    """Zeroed statistics record — the safe default for display paths."""
    return {
        "total": 0,
        "counts_by_status": {s.value: 0 for s in statuses},
        "total_value": 0.0,
        "average_value": 0.0,
    }


def summarize_records(
    records: list[dict], statuses: type[Enum], value_field: str,
) -> dict:
    """Count records per status and sum value_field in one pass."""
    stats = empty_statistics(statuses)
    counts = stats["counts_by_status"]
    total_value = 0.0
    for record in records:
        stats["total"] += 1
        status = record.get("status")
        if isinstance(status, Enum):
            status = status.value
        if status in counts:
            counts[status] += 1
        total_value += to_number(record.get(value_field))

    stats["total_value"] = total_value
    stats["average_value"] = (
        total_value / stats["total"] if stats["total"] > 0 else 0.0
    )
    return stats
