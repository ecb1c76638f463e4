"""POST/GET /v1/entries - survey submission and recent entries"""

import time
import logging
import uuid
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from lypay_survey.api.v1.schemas import EntryCreateRequest, EntryResponse, EntriesResponse, BanksResponse
from lypay_survey.api.dependencies import get_dashboard, get_request_id, reload_dashboard
from lypay_survey.infrastructure.database.session import get_db
from lypay_survey.infrastructure.database.repositories import EntryRepository
from lypay_survey.domain.dashboard import DashboardState
from lypay_survey.domain.exceptions import StoreError
from lypay_survey.domain.models import SurveyEntry, TransactionStatus
from lypay_survey.domain.reference import LIBYAN_BANKS
from lypay_survey.infrastructure.observability.metrics import record_submission, record_detection, store_failures_counter
from lypay_survey.infrastructure.observability.logging import log_submission, log_detection
from lypay_survey.utils.date_utils import utc_now

router = APIRouter()


@router.post("/entries", response_model=EntryResponse, status_code=status.HTTP_201_CREATED)
def create_entry(
    request_body: EntryCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    dashboard: DashboardState = Depends(get_dashboard),
):
    """
    Submit a survey entry.

    Flow:
    1. Assign id and submission time
    2. Persist to the entry store
    3. On success only, add to the dashboard snapshot and recompute alerts
    """
    start_time = time.time()
    request_id = get_request_id(request)

    rejection_reason = None
    if request_body.status is TransactionStatus.REJECTED and request_body.rejection_reason:
        rejection_reason = request_body.rejection_reason.strip() or None

    entry = SurveyEntry(
        id=uuid.uuid4().hex,
        subscription_type=request_body.subscription_type,
        transaction_type=request_body.transaction_type,
        amount=request_body.amount,
        bank_name=request_body.bank_name,
        status=request_body.status,
        rejection_reason=rejection_reason,
        created_at=utc_now(),
    )

    try:
        EntryRepository(db).add_entry(entry)
    except StoreError as e:
        store_failures_counter.labels(operation="append").inc()
        logging.error(f"Survey store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Survey store unavailable")

    dashboard.record_submission(entry)

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_submission(entry.status.value)
    record_detection(len(dashboard.problematic_banks))
    log_submission(request_id, entry.id, entry.bank_name, entry.status.value, duration_ms)
    log_detection(request_id, [b.bank_name for b in dashboard.problematic_banks])

    return EntryResponse.from_entry(entry)


@router.get("/entries", response_model=EntriesResponse)
def list_entries(dashboard: DashboardState = Depends(get_dashboard)):
    """Recent survey entries, newest first"""
    return EntriesResponse(entries=[EntryResponse.from_entry(e) for e in dashboard.entries])


@router.post("/entries/refresh", response_model=EntriesResponse)
def refresh_entries(
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Reload the snapshot from the entry store and recompute derived views.

    On store failure the previously loaded snapshot stays in place.
    """
    request_id = get_request_id(request)
    dashboard: DashboardState = request.app.state.dashboard
    try:
        reload_dashboard(dashboard, db, request_id)
    except StoreError as e:
        store_failures_counter.labels(operation="list").inc()
        logging.error(f"Survey store error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Survey store unavailable")

    return EntriesResponse(entries=[EntryResponse.from_entry(e) for e in dashboard.entries])


@router.get("/banks", response_model=BanksResponse)
def list_banks():
    return BanksResponse(banks=list(LIBYAN_BANKS))
