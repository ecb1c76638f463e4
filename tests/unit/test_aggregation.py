"""Unit tests for the aggregation engine"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo
from lypay_survey.domain.aggregation import (
    aggregate,
    completed_amounts_by_type,
    filter_by_time_range,
    top_problematic_banks,
)
from lypay_survey.domain.models import TimeRange, TransactionStatus, TransactionType

REJECTED = TransactionStatus.REJECTED
COMPLETED = TransactionStatus.COMPLETED
TRIPOLI = ZoneInfo("Africa/Tripoli")  # UTC+2, no DST


def test_aggregate_empty(now):
    stats = aggregate([], TimeRange.ALL, now=now, tz=TRIPOLI)

    assert stats.total == 0
    assert stats.completed == 0
    assert stats.rejected == 0
    assert stats.stability_rate == 0
    assert stats.amounts == {}
    assert stats.top_banks == []


def test_aggregate_counts_and_stability(make_entry, now):
    entries = [
        make_entry("A", COMPLETED),
        make_entry("A", COMPLETED),
        make_entry("B", COMPLETED),
        make_entry("B", REJECTED),
    ]

    stats = aggregate(entries, TimeRange.ALL, now=now, tz=TRIPOLI)

    assert stats.total == len(entries)
    assert stats.completed == 3
    assert stats.rejected == 1
    assert stats.completed + stats.rejected == stats.total
    assert stats.stability_rate == 75.0


def test_stability_rate_bounds(make_entry, now):
    all_rejected = [make_entry("A", REJECTED) for _ in range(3)]
    all_completed = [make_entry("A", COMPLETED) for _ in range(3)]

    assert aggregate(all_rejected, now=now, tz=TRIPOLI).stability_rate == 0.0
    assert aggregate(all_completed, now=now, tz=TRIPOLI).stability_rate == 100.0


def test_completed_amounts_by_type(make_entry):
    entries = [
        make_entry("A", COMPLETED, TransactionType.TRANSFER, amount="100.50"),
        make_entry("B", COMPLETED, TransactionType.TRANSFER, amount="49.50"),
        make_entry("A", COMPLETED, TransactionType.QR_PAY, amount="20"),
        make_entry("A", REJECTED, TransactionType.RECEIVE, amount="999"),
        make_entry("A", REJECTED, TransactionType.TRANSFER, amount="999"),
    ]

    amounts = completed_amounts_by_type(entries)

    assert amounts == {
        TransactionType.TRANSFER: Decimal("150.00"),
        TransactionType.QR_PAY: Decimal("20"),
    }
    assert TransactionType.RECEIVE not in amounts


def test_top_banks_ranked_by_count_with_ties(make_entry):
    """Counts [7, 7, 5, 3, 1, 1]: tied leaders first, capped at five"""
    entries = []
    for bank, rejections in [("A", 7), ("B", 7), ("C", 5), ("D", 3), ("E", 1), ("F", 1)]:
        entries.extend(make_entry(bank, REJECTED) for _ in range(rejections))
    entries.append(make_entry("C", COMPLETED))

    top = top_problematic_banks(entries)

    assert len(top) == 5
    assert {b.bank_name for b in top[:2]} == {"A", "B"}
    assert [b.rejected for b in top] == [7, 7, 5, 3, 1]
    assert top[2].bank_name == "C"


def test_top_banks_uses_count_not_rate(make_entry):
    """10 rejections out of 100 outranks 2 out of 2"""
    entries = [make_entry("Busy", REJECTED) for _ in range(10)]
    entries += [make_entry("Busy", COMPLETED) for _ in range(90)]
    entries += [make_entry("Small", REJECTED) for _ in range(2)]

    top = top_problematic_banks(entries)

    assert [b.bank_name for b in top] == ["Busy", "Small"]
    assert top[0].total == 100
    assert top[0].rejection_rate == 10.0
    assert top[1].rejection_rate == 100.0


def test_top_banks_excludes_banks_without_rejections(make_entry):
    entries = [make_entry("A", COMPLETED), make_entry("B", REJECTED)]
    assert [b.bank_name for b in top_problematic_banks(entries)] == ["B"]


def test_filter_today_uses_presentation_timezone(make_entry, now):
    # now is 14:00 in Tripoli on 2025-06-15
    yesterday_local = make_entry(created_at=datetime(2025, 6, 14, 21, 30, tzinfo=timezone.utc))  # 23:30 local
    today_local = make_entry(created_at=datetime(2025, 6, 14, 22, 30, tzinfo=timezone.utc))  # 00:30 local

    filtered = filter_by_time_range([yesterday_local, today_local], TimeRange.TODAY, now, TRIPOLI)

    assert filtered == [today_local]


@pytest.mark.parametrize("time_range, days", [(TimeRange.LAST_7_DAYS, 7), (TimeRange.LAST_30_DAYS, 30)])
def test_filter_trailing_ranges_inclusive(make_entry, now, time_range, days):
    on_cutoff = make_entry(created_at=now - timedelta(days=days))
    too_old = make_entry(created_at=now - timedelta(days=days, seconds=1))
    recent = make_entry(hours_ago=1)

    filtered = filter_by_time_range([on_cutoff, too_old, recent], time_range, now, TRIPOLI)

    assert filtered == [on_cutoff, recent]


def test_aggregate_respects_time_range(make_entry, now):
    entries = [
        make_entry("A", REJECTED, hours_ago=1),
        make_entry("A", COMPLETED, hours_ago=24 * 10),
        make_entry("B", REJECTED, hours_ago=24 * 40),
    ]

    assert aggregate(entries, TimeRange.ALL, now=now, tz=TRIPOLI).total == 3
    assert aggregate(entries, TimeRange.LAST_30_DAYS, now=now, tz=TRIPOLI).total == 2
    week = aggregate(entries, TimeRange.LAST_7_DAYS, now=now, tz=TRIPOLI)
    assert week.total == 1
    assert week.stability_rate == 0.0
    assert [b.bank_name for b in week.top_banks] == ["A"]


def test_aggregate_is_idempotent(make_entry, now):
    entries = [make_entry("A", REJECTED), make_entry("B", COMPLETED, amount="12.5")]
    assert aggregate(entries, now=now, tz=TRIPOLI) == aggregate(entries, now=now, tz=TRIPOLI)
