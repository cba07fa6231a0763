"""Line Items — derived quote totals and item-list edits.

Invariants:
    - calculate_total(items) == Σ to_number(quantity) * to_number(unit_price)
    - Never raises; a non-list argument totals to 0.0
    - Item-list helpers return new lists (the loaded record is never mutated)
    - A stored non-list items value is treated as an empty list everywhere
"""

from quotedesk.core.lenient import to_number


def calculate_total(items: object) -> float:
    """Lenient sum of quantity * unit_price over items."""
    if not isinstance(items, list):
        return 0.0
    total = 0.0
    for item in items:
        if not isinstance(item, dict):
            continue
        total += to_number(item.get("quantity")) * to_number(item.get("unit_price"))
    return total


def _as_list(items: object) -> list:
    return items if isinstance(items, list) else []


def append_item(items: object, item: dict) -> list[dict]:
    return [*_as_list(items), item]


def drop_item(items: object, item_id: str) -> list[dict]:
    return [
        i for i in _as_list(items)
        if not (isinstance(i, dict) and i.get("id") == item_id)
    ]
