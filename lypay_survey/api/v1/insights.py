"""GET /v1/insights - AI-written summary of the current entries"""

from fastapi import APIRouter, Depends

from lypay_survey.api.v1.schemas import InsightsResponse
from lypay_survey.api.dependencies import get_dashboard, get_summary_client
from lypay_survey.domain.dashboard import DashboardState
from lypay_survey.infrastructure.clients.summarizer import SummaryClient

router = APIRouter()


@router.get("/insights", response_model=InsightsResponse)
async def get_insights(
    dashboard: DashboardState = Depends(get_dashboard),
    summary_client: SummaryClient = Depends(get_summary_client),
):
    """Best-effort prose insights; falls back to a static message on any AI failure"""
    summary = await summary_client.summarize(dashboard.entries)
    return InsightsResponse(summary=summary)
