"""In-memory dashboard snapshot with derived views and alert visibility"""

from datetime import datetime
from typing import Iterable, List, Optional

from lypay_survey.domain.aggregation import aggregate
from lypay_survey.domain.detection import detect_critical_issues
from lypay_survey.domain.models import AggregateStats, ProblematicBankInfo, SurveyEntry, TimeRange


class DashboardState:
    """
    Owns the current entry snapshot and the views derived from it.

    The detector runs again on every load and every recorded submission, and
    the alert visibility follows its output each time: visible when any bank
    is flagged, hidden otherwise. Dismissing only lasts until the next run.
    """

    def __init__(self, limit: int = 50) -> None:
        self.limit = limit
        self.entries: List[SurveyEntry] = []
        self.problematic_banks: List[ProblematicBankInfo] = []
        self.alert_visible = False
        self.loaded = False

    def load(self, entries: Iterable[SurveyEntry], now: Optional[datetime] = None) -> None:
        """Replace the snapshot with entries freshly read from the store"""
        self.entries = list(entries)[: self.limit]
        self.loaded = True
        self._recompute(now)

    def record_submission(self, entry: SurveyEntry, now: Optional[datetime] = None) -> None:
        """Add an entry that has already been persisted, newest first, dropping the oldest past the limit"""
        self.entries = [entry] + self.entries[: self.limit - 1]
        self._recompute(now)

    def dismiss_alert(self) -> None:
        self.alert_visible = False

    def stats(self, time_range: TimeRange = TimeRange.ALL, now: Optional[datetime] = None) -> AggregateStats:
        return aggregate(self.entries, time_range, now=now)

    def _recompute(self, now: Optional[datetime]) -> None:
        self.problematic_banks = detect_critical_issues(self.entries, now=now)
        self.alert_visible = bool(self.problematic_banks)
