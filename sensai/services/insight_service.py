"""
Industry Insight Service - AI-generated industry snapshots.

One insight row exists per industry and is shared by all users in it.
Insights are regenerated once they pass their next_update timestamp.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError

from sensai.core.config import get_settings
from sensai.db.postgres import get_db_session
from sensai.models import DemandLevel, IndustryInsight, MarketOutlook
from sensai.services.gemini_client import GeminiClient, ModelsOverloadedError, get_gemini_client
from sensai.services.prompts import industry_insights_prompt

settings = get_settings()
logger = logging.getLogger(__name__)

INSIGHTS_ERROR = "Failed to fetch industry insights."


# ============================================================
# JSON VALIDATION HELPERS
# ============================================================

def _to_float(value, default: float = 0.0) -> float:
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def _string_list(value) -> list:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if v]


def _choice(value, enum_cls, default):
    for member in enum_cls:
        if str(value).strip().lower() == member.value.lower():
            return member.value
    return default.value


def validate_insights(data: dict) -> dict:
    """
    Validate and sanitize AI insight output.
    Maps the camelCase JSON keys onto model columns with safe types.
    """
    salary_ranges = []
    for entry in data.get("salaryRanges", []) or []:
        if not isinstance(entry, dict):
            continue
        salary_ranges.append({
            "role": str(entry.get("role", "")).strip(),
            "min": _to_float(entry.get("min")),
            "max": _to_float(entry.get("max")),
            "median": _to_float(entry.get("median")),
            "location": str(entry.get("location", "")).strip()
        })

    return {
        "salary_ranges": salary_ranges,
        "growth_rate": _to_float(data.get("growthRate")),
        "demand_level": _choice(data.get("demandLevel"), DemandLevel, DemandLevel.medium),
        "top_skills": _string_list(data.get("topSkills")),
        "market_outlook": _choice(data.get("marketOutlook"), MarketOutlook, MarketOutlook.neutral),
        "key_trends": _string_list(data.get("keyTrends")),
        "recommended_skills": _string_list(data.get("recommendedSkills"))
    }


def generate_ai_insights(industry: str, ai_client: Optional[GeminiClient] = None) -> dict:
    """Ask the model for an industry snapshot and return validated columns."""
    ai_client = ai_client or get_gemini_client()
    response = ai_client.generate_text(industry_insights_prompt(industry))
    data = ai_client.extract_json(response)
    if not isinstance(data, dict):
        raise ValueError("Industry insight response is not a JSON object")
    return validate_insights(data)


def _refresh_window(now: datetime) -> dict:
    return {"last_updated": now, "next_update": now + timedelta(days=settings.insight_refresh_days)}


# ============================================================
# INSIGHT SERVICE
# ============================================================

class IndustryInsightService:
    """
    Create / refresh / read industry insights.
    """

    def __init__(self):
        self.ai_client: GeminiClient = get_gemini_client()

    def _find(self, industry: str) -> Optional[dict]:
        with get_db_session() as db:
            insight = db.query(IndustryInsight).filter(IndustryInsight.industry == industry).first()
            return insight.to_dict() if insight else None

    def ensure_insight(self, industry: str) -> dict:
        """
        Return the insight for an industry, generating it when none exists.
        Used during onboarding before the user row points at the industry.
        """
        existing = self._find(industry)
        if existing:
            return existing

        columns = generate_ai_insights(industry, self.ai_client)
        try:
            with get_db_session() as db:
                insight = IndustryInsight(industry=industry, **columns, **_refresh_window(datetime.utcnow()))
                db.add(insight)
                db.flush()
                logger.info("Created industry insight for %s", industry)
                return insight.to_dict()
        except IntegrityError:
            # another onboarding created the same industry first
            existing = self._find(industry)
            if existing is None:
                raise
            return existing

    def get_insights(self, industry: str) -> dict:
        """
        Get insights for the user's industry.
        - missing: generate and store
        - stale (next_update passed): regenerate in place
        - otherwise: return stored
        """
        try:
            with get_db_session() as db:
                insight = db.query(IndustryInsight).filter(IndustryInsight.industry == industry).first()
                if insight and not insight.is_stale():
                    return insight.to_dict()

            if insight is None:
                return self.ensure_insight(industry)
            return self._regenerate(industry)
        except HTTPException:
            raise
        except ModelsOverloadedError as e:
            logger.error("Error in get_insights: %s", e)
            raise HTTPException(status_code=503, detail=str(e))
        except Exception:
            logger.exception("Error in get_insights for %s", industry)
            raise HTTPException(status_code=500, detail=INSIGHTS_ERROR)

    def refresh_insights(self, industry: str) -> dict:
        """Regenerate insights regardless of staleness."""
        try:
            return self._regenerate(industry)
        except ModelsOverloadedError as e:
            logger.error("Error in refresh_insights: %s", e)
            raise HTTPException(status_code=503, detail=str(e))
        except Exception:
            logger.exception("Error in refresh_insights for %s", industry)
            raise HTTPException(status_code=500, detail=INSIGHTS_ERROR)

    def _regenerate(self, industry: str) -> dict:
        columns = generate_ai_insights(industry, self.ai_client)
        now = datetime.utcnow()
        with get_db_session() as db:
            insight = db.query(IndustryInsight).filter(IndustryInsight.industry == industry).first()
            if insight is None:
                insight = IndustryInsight(industry=industry)
                db.add(insight)
            for key, value in {**columns, **_refresh_window(now)}.items():
                setattr(insight, key, value)
            db.flush()
            logger.info("Refreshed industry insight for %s", industry)
            return insight.to_dict()


def get_insight_service() -> IndustryInsightService:
    """Get insight service instance."""
    return IndustryInsightService()
