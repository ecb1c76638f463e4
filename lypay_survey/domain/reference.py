"""Reference data: known banks and Arabic display labels"""

from typing import Dict

from lypay_survey.domain.models import SubscriptionType, TransactionType, TransactionStatus

LIBYAN_BANKS = [
    "مصرف التجارة والتنمية",
    "مصرف الاستثمار العربي الإسلامي",
    "مصرف التضامن",
    "مصرف الأندلس",
    "مصرف المتحد للتجارة والاستثمار",
    "المصرف الإسلامي الليبي",
    "مصرف شمال أفريقيا",
    "المصرف التجاري الوطني",
    "مصرف الوحدة",
    "مصرف الجمهورية",
    "مصرف الأمان",
    "مصرف النوران",
    "مصرف السراي",
    "مصرف اليقين",
    "مصرف الصحارى",
]

SUBSCRIPTION_LABELS: Dict[SubscriptionType, str] = {
    SubscriptionType.INDIVIDUAL: "فرد",
    SubscriptionType.COMPANY: "شركة",
}

TRANSACTION_LABELS: Dict[TransactionType, str] = {
    TransactionType.TRANSFER: "تحويل",
    TransactionType.RECEIVE: "استلام",
    TransactionType.QR_PAY: "دفع عبر QR",
}

STATUS_LABELS: Dict[TransactionStatus, str] = {
    TransactionStatus.COMPLETED: "مكتملة",
    TransactionStatus.REJECTED: "مرفوضة",
}


def is_known_bank(name: str) -> bool:
    return name in LIBYAN_BANKS
