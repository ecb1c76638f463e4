"""SQLAlchemy ORM models for the survey entry log"""

from sqlalchemy import Column, DateTime, Numeric, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class SurveyEntryRecord(Base):
    """Submitted survey entry (append-only)"""

    __tablename__ = "survey_entries"

    id = Column(Text, primary_key=True)
    subscription_type = Column(Text, nullable=False)
    transaction_type = Column(Text, nullable=False)
    amount = Column(Numeric, nullable=False)
    bank_name = Column(Text, nullable=False)
    status = Column(Text, nullable=False)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
