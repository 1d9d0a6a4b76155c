"""
Monthly transfer limit endpoints.
"""

from fastapi import APIRouter

from moneyflow.schemas.limit import (
    LimitCheckRequest,
    LimitCheckResponse,
    MonthlyStatsRequest,
    MonthlyStatsResponse,
)
from moneyflow.services.limit_service import check_monthly_limit, monthly_stats

router = APIRouter()


@router.post("/check", response_model=LimitCheckResponse)
async def check_limit(payload: LimitCheckRequest):
    """Whether ``amount`` still fits under this month's transfer limit."""
    result = check_monthly_limit(payload.completed_amounts, payload.amount)
    return LimitCheckResponse(
        can_transfer=result.can_transfer,
        remaining=result.remaining,
        message=result.message,
    )


@router.post("/stats", response_model=MonthlyStatsResponse)
async def limit_stats(payload: MonthlyStatsRequest):
    """Amount sent, remaining allowance and percent of limit used."""
    stats = monthly_stats(payload.completed_amounts)
    return MonthlyStatsResponse(
        total_sent=stats.total_sent,
        remaining=stats.remaining,
        percent_used=stats.percent_used,
    )
