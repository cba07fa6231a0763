"""Recent records — newest first with a deterministic tie-break."""

from quotedesk.core.recent_records import parse_timestamp, recent_records


def _record(rid, created_at, number=None):
    return {"id": rid, "created_at": created_at, "quote_number": number}


def test_orders_by_created_at_descending():
    records = [
        _record("a", "2024-01-01T10:00:00+00:00"),
        _record("b", "2024-03-01T10:00:00+00:00"),
        _record("c", "2024-02-01T10:00:00+00:00"),
    ]
    result = recent_records(records, 10, "quote_number")
    assert [r["id"] for r in result] == ["b", "c", "a"]


def test_limit_caps_the_result():
    records = [_record(str(i), f"2024-01-0{i}T00:00:00Z") for i in range(1, 6)]
    result = recent_records(records, 2, "quote_number")
    assert [r["id"] for r in result] == ["5", "4"]


def test_equal_timestamps_break_ties_by_sequence_number():
    same = "2024-05-05T12:00:00+00:00"
    records = [
        _record("x", same, "QT-000002"),
        _record("y", same, "QT-000010"),
        _record("z", same, "QT-000003"),
    ]
    result = recent_records(records, 10, "quote_number")
    assert [r["quote_number"] for r in result] == ["QT-000010", "QT-000003", "QT-000002"]


def test_unparseable_timestamps_sort_last():
    records = [_record("bad", "yesterday"), _record("good", "2024-01-01T00:00:00Z")]
    result = recent_records(records, 10, "quote_number")
    assert [r["id"] for r in result] == ["good", "bad"]


def test_non_positive_limit_returns_empty():
    assert recent_records([_record("a", "2024-01-01T00:00:00Z")], 0, "quote_number") == []


def test_naive_timestamps_are_treated_as_utc():
    assert parse_timestamp("2024-01-01T00:00:00").tzinfo is not None
