"""Quote totals and item-list edits — pure functions, data in / data out."""

from quotedesk.core.line_items import append_item, calculate_total, drop_item


def test_total_sums_quantity_times_unit_price():
    items = [
        {"quantity": 2, "unit_price": 15.5},
        {"quantity": "3", "unit_price": "10"},
    ]
    assert calculate_total(items) == 61.0


def test_malformed_values_count_as_zero():
    items = [
        {"quantity": 2, "unit_price": 15.5},
        {"quantity": 1, "unit_price": "abc"},
        {"quantity": None, "unit_price": 4},
    ]
    assert calculate_total(items) == 31.0


def test_missing_fields_count_as_zero():
    assert calculate_total([{"description": "Labour"}]) == 0.0


def test_empty_and_non_list_inputs_total_zero():
    assert calculate_total([]) == 0.0
    assert calculate_total(None) == 0.0
    assert calculate_total("items") == 0.0
    assert calculate_total({"quantity": 1, "unit_price": 1}) == 0.0


def test_non_dict_items_are_skipped():
    assert calculate_total(["x", 4, {"quantity": 1, "unit_price": 9}]) == 9.0


def test_append_item_returns_new_list():
    items = [{"id": "a"}]
    result = append_item(items, {"id": "b"})
    assert [i["id"] for i in result] == ["a", "b"]
    assert items == [{"id": "a"}]


def test_append_item_handles_missing_list():
    assert append_item(None, {"id": "a"}) == [{"id": "a"}]


def test_drop_item_removes_matching_id_only():
    items = [{"id": "a"}, {"id": "b"}, "junk"]
    assert drop_item(items, "a") == [{"id": "b"}, "junk"]
    assert len(items) == 3


def test_drop_item_with_unknown_id_keeps_everything():
    items = [{"id": "a"}]
    assert drop_item(items, "zzz") == [{"id": "a"}]


def test_append_item_treats_non_list_items_as_empty():
    assert append_item("abc", {"id": "a"}) == [{"id": "a"}]
    assert append_item({"id": "x"}, {"id": "a"}) == [{"id": "a"}]


def test_drop_item_treats_non_list_items_as_empty():
    assert drop_item("abc", "a") == []
