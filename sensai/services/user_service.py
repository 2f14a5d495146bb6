"""
User Service - onboarding and profile updates.

Onboarding makes sure the industry insight row exists before the user
row is pointed at it.
"""

import logging
from datetime import datetime

from fastapi import HTTPException

from sensai.db.postgres import get_db_session
from sensai.models import User
from sensai.services.gemini_client import ModelsOverloadedError
from sensai.services.insight_service import IndustryInsightService

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ["industry", "bio", "experience", "skills", "target_role", "leetcode_username"]


def industry_key(industry: str, sub_industry: str) -> str:
    """Stored industry is '<industry>-<specialization>'."""
    return f"{industry.strip()}-{sub_industry.strip()}"


class UserService:

    def __init__(self):
        self.insights = IndustryInsightService()

    def _ensure_insight(self, industry: str) -> None:
        try:
            self.insights.ensure_insight(industry)
        except ModelsOverloadedError as e:
            raise HTTPException(status_code=503, detail=str(e))
        except Exception:
            logger.exception("Error generating insight for %s", industry)
            raise HTTPException(status_code=500, detail="Failed to update profile")

    def _apply(self, user_id: int, changes: dict) -> dict:
        try:
            with get_db_session() as db:
                user = db.get(User, user_id)
                if user is None:
                    raise HTTPException(status_code=404, detail="User not found")
                for field, value in changes.items():
                    setattr(user, field, value)
                user.updated_at = datetime.utcnow()
                db.flush()
                return user.to_dict()
        except HTTPException:
            raise
        except Exception:
            logger.exception("Error updating user %s", user_id)
            raise HTTPException(status_code=500, detail="Failed to update profile")

    def onboard(self, user_id: int, data: dict) -> dict:
        """
        Complete onboarding.

        Args:
            data: industry, sub_industry, bio, experience, skills, target_role
        """
        industry = industry_key(data["industry"], data["sub_industry"])
        self._ensure_insight(industry)
        return self._apply(user_id, {
            "industry": industry,
            "bio": data.get("bio"),
            "experience": data.get("experience"),
            "skills": data.get("skills") or [],
            "target_role": data.get("target_role")
        })

    def update_profile(self, user_id: int, data: dict) -> dict:
        """Partial update. Only provided fields are written."""
        changes = {field: data[field] for field in PROFILE_FIELDS if data.get(field) is not None}
        if not changes:
            raise HTTPException(status_code=400, detail="No fields to update")

        if "industry" in changes:
            self._ensure_insight(changes["industry"])
        return self._apply(user_id, changes)


def get_user_service() -> UserService:
    """Get user service instance."""
    return UserService()
