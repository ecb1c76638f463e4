"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from lypay_survey.domain.models import (
    AggregateStats,
    ProblematicBankInfo,
    SubscriptionType,
    SurveyEntry,
    TimeRange,
    TransactionStatus,
    TransactionType,
)
from lypay_survey.domain.reference import (
    STATUS_LABELS,
    SUBSCRIPTION_LABELS,
    TRANSACTION_LABELS,
    is_known_bank,
)


class EntryCreateRequest(BaseModel):
    """Request body for POST /v1/entries"""

    subscription_type: SubscriptionType
    transaction_type: TransactionType
    amount: Decimal = Field(..., ge=0, description="Transaction amount, currency-agnostic")
    bank_name: str = Field(..., min_length=1, description="Bank from the known-bank list")
    status: TransactionStatus
    rejection_reason: Optional[str] = None

    @field_validator("bank_name")
    @classmethod
    def bank_must_be_known(cls, value: str) -> str:
        if not is_known_bank(value):
            raise ValueError("Unknown bank")
        return value


class EntryResponse(BaseModel):
    """Single survey entry with display labels"""

    id: str
    subscription_type: SubscriptionType
    subscription_label: str
    transaction_type: TransactionType
    transaction_label: str
    amount: Decimal
    bank_name: str
    status: TransactionStatus
    status_label: str
    rejection_reason: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entry(cls, entry: SurveyEntry) -> "EntryResponse":
        return cls(
            id=entry.id,
            subscription_type=entry.subscription_type,
            subscription_label=SUBSCRIPTION_LABELS[entry.subscription_type],
            transaction_type=entry.transaction_type,
            transaction_label=TRANSACTION_LABELS[entry.transaction_type],
            amount=entry.amount,
            bank_name=entry.bank_name,
            status=entry.status,
            status_label=STATUS_LABELS[entry.status],
            rejection_reason=entry.rejection_reason,
            created_at=entry.created_at,
        )


class EntriesResponse(BaseModel):
    """Response for GET /v1/entries"""

    entries: List[EntryResponse]


class BankStatsSchema(BaseModel):
    """Per-bank row of the top problematic banks table"""

    bank_name: str
    total: int
    completed: int
    rejected: int
    rejection_rate: float


class StatsResponse(BaseModel):
    """Response for GET /v1/stats"""

    time_range: TimeRange
    total: int
    completed: int
    rejected: int
    stability_rate: float
    amounts: Dict[TransactionType, Decimal]
    top_banks: List[BankStatsSchema]

    @classmethod
    def from_stats(cls, time_range: TimeRange, stats: AggregateStats) -> "StatsResponse":
        return cls(
            time_range=time_range,
            total=stats.total,
            completed=stats.completed,
            rejected=stats.rejected,
            stability_rate=stats.stability_rate,
            amounts=stats.amounts,
            top_banks=[
                BankStatsSchema(
                    bank_name=b.bank_name,
                    total=b.total,
                    completed=b.completed,
                    rejected=b.rejected,
                    rejection_rate=b.rejection_rate,
                )
                for b in stats.top_banks
            ],
        )


class ProblematicBankSchema(BaseModel):
    """Bank flagged in the last 24 hours"""

    bank_name: str
    issue_types: List[TransactionType]
    last_rejection_time: datetime
    rejection_count: int

    @classmethod
    def from_info(cls, info: ProblematicBankInfo) -> "ProblematicBankSchema":
        return cls(
            bank_name=info.bank_name,
            issue_types=list(info.issue_types),
            last_rejection_time=info.last_rejection_time,
            rejection_count=info.rejection_count,
        )


class AlertsResponse(BaseModel):
    """Response for GET /v1/alerts"""

    visible: bool
    problematic_banks: List[ProblematicBankSchema]


class InsightsResponse(BaseModel):
    """Response for GET /v1/insights"""

    summary: str


class BanksResponse(BaseModel):
    """Response for GET /v1/banks"""

    banks: List[str]
