"""Aggregation engine - dashboard statistics over a selected time range"""

from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo

from lypay_survey.config import settings
from lypay_survey.domain.grouping import group_by_bank
from lypay_survey.domain.models import (
    AggregateStats,
    BankAggregateStats,
    SurveyEntry,
    TimeRange,
    TransactionStatus,
    TransactionType,
)
from lypay_survey.utils.date_utils import ensure_utc, trailing_cutoff, utc_now

TOP_BANKS_LIMIT = 5


def filter_by_time_range(
    entries: Iterable[SurveyEntry],
    time_range: TimeRange,
    now: datetime,
    tz: tzinfo,
) -> List[SurveyEntry]:
    """
    Restrict entries to the reporting scope.

    - ALL: everything
    - TODAY: same calendar date as now, in the presentation time zone
    - LAST_7_DAYS / LAST_30_DAYS: created_at >= now - N days (inclusive)
    """
    entries = list(entries)
    if time_range is TimeRange.ALL:
        return entries
    if time_range is TimeRange.TODAY:
        today = ensure_utc(now).astimezone(tz).date()
        return [e for e in entries if ensure_utc(e.created_at).astimezone(tz).date() == today]
    if time_range is TimeRange.LAST_7_DAYS:
        cutoff = trailing_cutoff(now, days=7)
    elif time_range is TimeRange.LAST_30_DAYS:
        cutoff = trailing_cutoff(now, days=30)
    else:
        raise ValueError(f"Unknown time range: {time_range!r}")
    return [e for e in entries if ensure_utc(e.created_at) >= cutoff]


def completed_amounts_by_type(entries: Iterable[SurveyEntry]) -> Dict[TransactionType, Decimal]:
    """Sum amounts of COMPLETED entries per transaction type; types with none are absent"""
    amounts: Dict[TransactionType, Decimal] = {}
    for entry in entries:
        if entry.status is TransactionStatus.COMPLETED:
            amounts[entry.transaction_type] = amounts.get(entry.transaction_type, Decimal("0")) + entry.amount
    return amounts


def top_problematic_banks(entries: Iterable[SurveyEntry], limit: int = TOP_BANKS_LIMIT) -> List[BankAggregateStats]:
    """
    Rank banks by raw rejection count (not rate), keeping only banks with rejections.

    Ties keep the order banks were first seen in.
    """
    bank_stats = []
    for bank_name, bank_entries in group_by_bank(entries).items():
        total = len(bank_entries)
        completed = sum(1 for e in bank_entries if e.status is TransactionStatus.COMPLETED)
        rejected = total - completed
        bank_stats.append(
            BankAggregateStats(
                bank_name=bank_name,
                total=total,
                completed=completed,
                rejected=rejected,
                rejection_rate=(rejected / total) * 100 if total > 0 else 0.0,
            )
        )

    problematic = [b for b in bank_stats if b.rejected > 0]
    problematic.sort(key=lambda b: b.rejected, reverse=True)
    return problematic[:limit]


def aggregate(
    entries: Iterable[SurveyEntry],
    time_range: TimeRange = TimeRange.ALL,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> AggregateStats:
    """
    Main entry point: compute dashboard statistics for one time range.

    Stability rate is completed / total * 100, defined as 0 for an empty range.
    """
    if now is None:
        now = utc_now()
    if tz is None:
        tz = ZoneInfo(settings.display_timezone)

    filtered = filter_by_time_range(entries, time_range, now, tz)

    total = len(filtered)
    completed = sum(1 for e in filtered if e.status is TransactionStatus.COMPLETED)
    stability_rate = (completed / total) * 100 if total > 0 else 0.0

    return AggregateStats(
        total=total,
        completed=completed,
        rejected=total - completed,
        stability_rate=stability_rate,
        amounts=completed_amounts_by_type(filtered),
        top_banks=top_problematic_banks(filtered),
    )
