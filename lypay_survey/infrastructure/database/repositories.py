"""Data access layer for survey entries"""

import logging
from decimal import Decimal
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lypay_survey.config import settings
from lypay_survey.domain.exceptions import MalformedEntryError, StoreError
from lypay_survey.domain.models import SubscriptionType, SurveyEntry, TransactionStatus, TransactionType
from lypay_survey.infrastructure.database.models import SurveyEntryRecord
from lypay_survey.utils.date_utils import ensure_utc, parse_timestamp

logger = logging.getLogger(__name__)


def record_to_entry(record: SurveyEntryRecord) -> SurveyEntry:
    """
    Map a stored row to a domain entry.

    Raises:
        ValueError: On unknown enum values or a missing timestamp
        MalformedEntryError: On a text timestamp that is not ISO-8601
    """
    if record.created_at is None:
        raise ValueError("created_at is missing")
    # Text columns and legacy rows come back as ISO-8601 strings
    if isinstance(record.created_at, str):
        created_at = parse_timestamp(record.created_at)
    else:
        created_at = ensure_utc(record.created_at)
    return SurveyEntry(
        id=record.id,
        subscription_type=SubscriptionType(record.subscription_type),
        transaction_type=TransactionType(record.transaction_type),
        amount=Decimal(record.amount),
        bank_name=record.bank_name,
        status=TransactionStatus(record.status),
        rejection_reason=record.rejection_reason,
        created_at=created_at,
    )


class EntryRepository:
    """Repository for survey entries"""

    def __init__(self, db: Session):
        self.db = db

    def add_entry(self, entry: SurveyEntry) -> SurveyEntryRecord:
        """
        Persist a survey entry and commit.

        Raises:
            StoreError: If the insert or commit fails
        """
        db_entry = SurveyEntryRecord(
            id=entry.id,
            subscription_type=entry.subscription_type.value,
            transaction_type=entry.transaction_type.value,
            amount=entry.amount,
            bank_name=entry.bank_name,
            status=entry.status.value,
            rejection_reason=entry.rejection_reason,
            created_at=entry.created_at,
        )
        try:
            self.db.add(db_entry)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Failed to store entry {entry.id}: {e}") from e
        return db_entry

    def list_recent(self, limit: int | None = None) -> List[SurveyEntry]:
        """
        Fetch the most recent entries, newest first.

        Rows that cannot be mapped to a valid entry are skipped and logged.

        Raises:
            StoreError: If the query fails
        """
        if limit is None:
            limit = settings.recent_entries_limit
        try:
            records = (
                self.db.query(SurveyEntryRecord)
                .order_by(SurveyEntryRecord.created_at.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list entries: {e}") from e

        entries = []
        for record in records:
            try:
                entries.append(record_to_entry(record))
            except (MalformedEntryError, ValueError, TypeError, ArithmeticError) as e:
                logger.warning(
                    f"Skipping malformed survey entry: {e}",
                    extra={"entry_id": record.id},
                )
        return entries
