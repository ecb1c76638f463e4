"""Critical-issue detector - flags banks with unrecovered failures in the last 24 hours"""

from datetime import datetime
from typing import Iterable, List, Optional

from lypay_survey.domain.exceptions import MalformedEntryError
from lypay_survey.domain.grouping import group_by_bank
from lypay_survey.domain.models import ProblematicBankInfo, SurveyEntry, TransactionStatus
from lypay_survey.utils.date_utils import ensure_utc, trailing_cutoff, utc_now

ALERT_WINDOW_HOURS = 24

# A bank with this many completions in the window counts as recovered
RECOVERY_COMPLETIONS = 2


def entries_in_alert_window(entries: Iterable[SurveyEntry], now: datetime) -> List[SurveyEntry]:
    """Entries strictly newer than now - 24h; an entry exactly on the cutoff is excluded"""
    cutoff = trailing_cutoff(now, hours=ALERT_WINDOW_HOURS)
    return [e for e in entries if ensure_utc(e.created_at) > cutoff]


def detect_critical_issues(
    entries: Iterable[SurveyEntry],
    now: Optional[datetime] = None,
) -> List[ProblematicBankInfo]:
    """
    Find banks that are currently problematic.

    Rule per bank, over the trailing 24-hour window:
    - at least one REJECTED entry, and
    - fewer than 2 COMPLETED entries (2+ completions means the bank recovered)

    Returns:
        Flagged banks, most recently affected first. Banks with equal
        last-rejection times keep the order they were first seen in.

    Raises:
        MalformedEntryError: If an entry carries an unknown status
    """
    if now is None:
        now = utc_now()

    issues: List[ProblematicBankInfo] = []
    for bank_name, bank_entries in group_by_bank(entries_in_alert_window(entries, now)).items():
        rejections: List[SurveyEntry] = []
        completions = 0
        for entry in bank_entries:
            if entry.status is TransactionStatus.REJECTED:
                rejections.append(entry)
            elif entry.status is TransactionStatus.COMPLETED:
                completions += 1
            else:
                raise MalformedEntryError(f"Unknown status {entry.status!r} on entry {entry.id}")

        if not rejections or completions >= RECOVERY_COMPLETIONS:
            continue

        issues.append(
            ProblematicBankInfo(
                bank_name=bank_name,
                issue_types=tuple(dict.fromkeys(e.transaction_type for e in rejections)),
                last_rejection_time=max(ensure_utc(e.created_at) for e in rejections),
                rejection_count=len(rejections),
            )
        )

    # sorted() is stable, so ties keep encounter order
    return sorted(issues, key=lambda info: info.last_rejection_time, reverse=True)
