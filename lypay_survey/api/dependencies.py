"""Dependency injection for FastAPI endpoints"""

import logging

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from lypay_survey.domain.dashboard import DashboardState
from lypay_survey.domain.exceptions import StoreError
from lypay_survey.infrastructure.clients.summarizer import SummaryClient
from lypay_survey.infrastructure.database.repositories import EntryRepository
from lypay_survey.infrastructure.database.session import get_db
from lypay_survey.infrastructure.observability.logging import log_detection
from lypay_survey.infrastructure.observability.metrics import record_detection, store_failures_counter


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_summary_client() -> SummaryClient:
    """Provide AI summarization client instance"""
    return SummaryClient()


def reload_dashboard(dashboard: DashboardState, db: Session, request_id: str) -> None:
    """
    Replace the dashboard snapshot with the store's recent entries.

    Raises:
        StoreError: If the store cannot be read; the previous snapshot is kept
    """
    entries = EntryRepository(db).list_recent()
    dashboard.load(entries)
    record_detection(len(dashboard.problematic_banks))
    log_detection(request_id, [b.bank_name for b in dashboard.problematic_banks])


def get_dashboard(request: Request, db: Session = Depends(get_db)) -> DashboardState:
    """Provide the app-wide dashboard, loading it from the store on first use"""
    dashboard: DashboardState = request.app.state.dashboard
    if not dashboard.loaded:
        try:
            reload_dashboard(dashboard, db, get_request_id(request))
        except StoreError as e:
            store_failures_counter.labels(operation="list").inc()
            logging.error(f"Survey store error: {e}", extra={"request_id": get_request_id(request)})
            raise HTTPException(status_code=503, detail="Survey store unavailable")
    return dashboard
