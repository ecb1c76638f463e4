"""Grouping helpers shared by the detector and the aggregation engine"""

from typing import Dict, Iterable, List

from lypay_survey.domain.models import SurveyEntry


def group_by_bank(entries: Iterable[SurveyEntry]) -> Dict[str, List[SurveyEntry]]:
    """Group entries by bank name, keeping the order banks are first seen"""
    groups: Dict[str, List[SurveyEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.bank_name, []).append(entry)
    return groups
