"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List
from pythonjsonlogger.json import JsonFormatter

from lypay_survey.config import settings


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_submission(
    request_id: str,
    entry_id: str,
    bank_name: str,
    status: str,
    duration_ms: float,
) -> None:
    """Log structured submission outcome"""
    logging.info(
        "Survey entry stored",
        extra={
            "request_id": request_id,
            "entry_id": entry_id,
            "bank_name": bank_name,
            "step": "submission_complete",
            "entry_status": status,
            "duration_ms": duration_ms,
        },
    )


def log_detection(request_id: str, flagged_banks: List[str]) -> None:
    """Log the outcome of a critical-issue detector run"""
    logging.info(
        "Critical issues recomputed",
        extra={
            "request_id": request_id,
            "step": "detection_complete",
            "flagged_count": len(flagged_banks),
            "flagged_banks": flagged_banks,
        },
    )
