"""
Dashboard Routes

GET /dashboard/insights - Industry insights for the user's industry
POST /dashboard/insights/refresh - Regenerate insights now
"""

from fastapi import APIRouter, Depends

from sensai.core.auth import get_onboarded_user
from sensai.services.insight_service import get_insight_service
from sensai.schemas.schemas import IndustryInsightResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/insights", response_model=IndustryInsightResponse)
def get_industry_insights(user: dict = Depends(get_onboarded_user)):
    """
    Get AI industry insights.

    Generated on first request, regenerated once older than the refresh window.
    """
    service = get_insight_service()
    return service.get_insights(user["industry"])


@router.post("/insights/refresh", response_model=IndustryInsightResponse)
def refresh_industry_insights(user: dict = Depends(get_onboarded_user)):
    """Regenerate insights immediately."""
    service = get_insight_service()
    return service.refresh_insights(user["industry"])
