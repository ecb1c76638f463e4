"""GET /v1/stats and /v1/alerts - dashboard statistics and critical-issue alerts"""

from fastapi import APIRouter, Depends, Query

from lypay_survey.api.v1.schemas import StatsResponse, AlertsResponse, ProblematicBankSchema
from lypay_survey.api.dependencies import get_dashboard
from lypay_survey.domain.dashboard import DashboardState
from lypay_survey.domain.models import TimeRange

router = APIRouter()


def _alerts_response(dashboard: DashboardState) -> AlertsResponse:
    return AlertsResponse(
        visible=dashboard.alert_visible,
        problematic_banks=[ProblematicBankSchema.from_info(info) for info in dashboard.problematic_banks],
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    time_range: TimeRange = Query(TimeRange.ALL, description="Reporting scope: all, today, week or month"),
    dashboard: DashboardState = Depends(get_dashboard),
):
    """
    Aggregate statistics for the selected time range.

    Returns:
        Totals, stability rate, completed amounts per transaction type,
        and the top 5 banks by rejection count
    """
    return StatsResponse.from_stats(time_range, dashboard.stats(time_range))


@router.get("/alerts", response_model=AlertsResponse)
def get_alerts(dashboard: DashboardState = Depends(get_dashboard)):
    """Banks flagged in the trailing 24 hours, with the alert visibility flag"""
    return _alerts_response(dashboard)


@router.post("/alerts/dismiss", response_model=AlertsResponse)
def dismiss_alert(dashboard: DashboardState = Depends(get_dashboard)):
    """Hide the alert until the next recomputation"""
    dashboard.dismiss_alert()
    return _alerts_response(dashboard)
