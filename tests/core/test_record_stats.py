"""Record statistics — single-pass counts and value sums, no IO."""

from quotedesk.core.domain_types import PcStatus, QuoteStatus
from quotedesk.core.record_stats import empty_statistics, summarize_records


def test_empty_collection_returns_zeros():
    stats = summarize_records([], QuoteStatus, "total_amount")
    assert stats["total"] == 0
    assert stats["total_value"] == 0.0
    assert stats["average_value"] == 0.0
    assert stats["counts_by_status"] == {
        "draft": 0, "pending": 0, "approved": 0, "declined": 0,
    }


def test_counts_per_status_and_sums_values():
    records = [
        {"status": "draft", "total_amount": 100},
        {"status": "approved", "total_amount": "50.5"},
        {"status": "approved", "total_amount": 49.5},
    ]
    stats = summarize_records(records, QuoteStatus, "total_amount")
    assert stats["total"] == 3
    assert stats["counts_by_status"]["approved"] == 2
    assert stats["counts_by_status"]["draft"] == 1
    assert stats["total_value"] == 200.0
    assert stats["average_value"] == 200.0 / 3


def test_unknown_status_counts_toward_total_only():
    records = [{"status": "archived", "total_amount": 10}]
    stats = summarize_records(records, QuoteStatus, "total_amount")
    assert stats["total"] == 1
    assert sum(stats["counts_by_status"].values()) == 0


def test_non_numeric_values_count_as_zero():
    records = [
        {"status": "active", "estimated_value": "n/a"},
        {"status": "urgent", "estimated_value": 30},
    ]
    stats = summarize_records(records, PcStatus, "estimated_value")
    assert stats["total_value"] == 30.0
    assert stats["average_value"] == 15.0


def test_empty_statistics_has_key_per_status():
    stats = empty_statistics(PcStatus)
    assert set(stats["counts_by_status"]) == {"active", "completed", "draft", "urgent"}
