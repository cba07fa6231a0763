"""Record Search — case-insensitive substring filter over a collection.

Invariants:
    - Pure function: no IO, no async, input list never mutated
    - Blank or whitespace-only query returns the collection unchanged
    - Query is trimmed and lower-cased; values are str()-coerced and lower-cased
    - field == SEARCH_ALL checks every non-empty scalar attribute of the record;
      nested collections (items) and falsy values (0, "", False) never match
    - A named field checks only that attribute, or its alias group when the
      kind declares one (e.g. "company" -> company OR client_name)

Design Decisions:
    - Simple substring matching (not fuzzy) — predictable and testable
    - Aliases passed in by the caller: core stays ignorant of per-kind field names
"""

from collections.abc import Mapping

from quotedesk.core.domain_types import SEARCH_ALL


_SCALARS = (str, int, float)


def _contains(value: object, term: str) -> bool:
    if value is None:
        return False
    return term in str(value).lower()


def _scalar_contains(value: object, term: str) -> bool:
    # nested lists/dicts (quote items) and empty or zero values never match
    if not value or not isinstance(value, _SCALARS):
        return False
    return term in str(value).lower()


def _matches(
    record: dict, term: str, field: str,
    field_aliases: Mapping[str, tuple[str, ...]],
) -> bool:
    if field == SEARCH_ALL:
        return any(_scalar_contains(v, term) for v in record.values())
    attributes = field_aliases.get(field, (field,))
    return any(_contains(record.get(a), term) for a in attributes)


def filter_records(
    records: list[dict],
    query: str | None,
    field: str = SEARCH_ALL,
    field_aliases: Mapping[str, tuple[str, ...]] | None = None,
) -> list[dict]:
    """Return the records whose field (or any field) contains query."""
    if query is None or not query.strip():
        return records
    term = query.strip().lower()
    aliases = field_aliases or {}
    return [r for r in records if _matches(r, term, field, aliases)]
