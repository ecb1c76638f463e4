"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple


class SubscriptionType(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    COMPANY = "COMPANY"


class TransactionType(str, Enum):
    TRANSFER = "TRANSFER"
    RECEIVE = "RECEIVE"
    QR_PAY = "QR_PAY"


class TransactionStatus(str, Enum):
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"


class TimeRange(str, Enum):
    """Reporting scope selectable on the dashboard"""

    ALL = "all"
    TODAY = "today"
    LAST_7_DAYS = "week"
    LAST_30_DAYS = "month"


@dataclass(frozen=True)
class SurveyEntry:
    """One submitted record describing a single payment transaction experience"""

    id: str
    subscription_type: SubscriptionType
    transaction_type: TransactionType
    amount: Decimal
    bank_name: str
    status: TransactionStatus
    created_at: datetime
    rejection_reason: Optional[str] = None


@dataclass(frozen=True)
class ProblematicBankInfo:
    """Bank flagged by the 24h critical-issue detector"""

    bank_name: str
    issue_types: Tuple[TransactionType, ...]  # distinct, first-occurrence order
    last_rejection_time: datetime
    rejection_count: int


@dataclass
class BankAggregateStats:
    """Per-bank counts within the selected time range"""

    bank_name: str
    total: int
    completed: int
    rejected: int
    rejection_rate: float


@dataclass
class AggregateStats:
    """Dashboard statistics for one time range"""

    total: int
    completed: int
    rejected: int
    stability_rate: float
    amounts: Dict[TransactionType, Decimal] = field(default_factory=dict)
    top_banks: List[BankAggregateStats] = field(default_factory=list)
