"""Unit tests for timestamp helpers"""

import pytest
from datetime import datetime, timedelta, timezone
from lypay_survey.domain.exceptions import MalformedEntryError
from lypay_survey.utils.date_utils import ensure_utc, parse_timestamp, trailing_cutoff


def test_parse_timestamp_javascript_iso():
    """toISOString() output with trailing Z"""
    parsed = parse_timestamp("2025-06-15T10:30:00.123Z")
    assert parsed == datetime(2025, 6, 15, 10, 30, 0, 123000, tzinfo=timezone.utc)


def test_parse_timestamp_converts_offset_to_utc():
    parsed = parse_timestamp("2025-06-15T12:30:00+02:00")
    assert parsed == datetime(2025, 6, 15, 10, 30, tzinfo=timezone.utc)
    assert parsed.utcoffset() == timedelta(0)


def test_parse_timestamp_naive_is_utc():
    assert parse_timestamp("2025-06-15T10:30:00") == datetime(2025, 6, 15, 10, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["", "yesterday", "2025-13-40T00:00:00Z", None, 1718444400])
def test_parse_timestamp_rejects_malformed(value):
    with pytest.raises(MalformedEntryError):
        parse_timestamp(value)


def test_ensure_utc_keeps_instant():
    local = datetime(2025, 6, 15, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert ensure_utc(local) == datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def test_trailing_cutoff():
    now = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)
    assert trailing_cutoff(now, hours=24) == datetime(2025, 6, 14, 12, 0, tzinfo=timezone.utc)
    assert trailing_cutoff(now, days=7) == datetime(2025, 6, 8, 12, 0, tzinfo=timezone.utc)
