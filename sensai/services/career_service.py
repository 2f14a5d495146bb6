"""
Career Coaching Service - AI skill-gap analysis and coaching reports.

Every report is generated by Gemini as markdown and stored in MongoDB
(skill_gap_reports) so the dashboard can show earlier analyses.
"""

import logging
from typing import List, Optional

from fastapi import HTTPException

from sensai.services.gemini_client import GeminiClient, ModelsOverloadedError, get_gemini_client
from sensai.services.mongo_service import SkillGapReportService
from sensai.services.prompts import coding_recommendation_prompt, resume_image_prompt, skill_gap_prompt

logger = logging.getLogger(__name__)


class CareerCoachService:

    def __init__(self):
        self.ai_client: GeminiClient = get_gemini_client()
        self.reports = SkillGapReportService()

    def _run(self, call, error_message: str) -> str:
        try:
            return call().strip()
        except ModelsOverloadedError as e:
            raise HTTPException(status_code=503, detail=str(e))
        except Exception:
            logger.exception(error_message)
            raise HTTPException(status_code=500, detail=error_message)

    def _store(self, user_id: int, kind: str, content: str, target_role: str = None, target_company: str = None):
        try:
            self.reports.insert(user_id, kind, content, target_role=target_role, target_company=target_company)
        except Exception as e:
            # report history is best effort; the analysis is still returned
            logger.error("Failed to store %s report: %s", kind, e)

    def skill_gap(
        self,
        user: dict,
        target_role: Optional[str] = None,
        skills: Optional[List[str]] = None,
        leetcode_stats: Optional[dict] = None,
        resume_text: Optional[str] = None
    ) -> dict:
        """
        Analyze readiness for a role.
        Role and skills fall back to the user's profile.
        """
        target_role = target_role or user.get("target_role")
        if not target_role:
            raise HTTPException(status_code=400, detail="Missing targetRole for skill gap analysis")
        skills = skills if skills is not None else (user.get("skills") or [])

        prompt = skill_gap_prompt(target_role, skills, leetcode_stats, resume_text)
        gap = self._run(lambda: self.ai_client.generate_text(prompt), "Failed to analyze skill gap.")
        self._store(user["user_id"], "skill_gap", gap, target_role=target_role)
        return {"gap": gap, "recommendations": []}

    def analyze_resume_image(
        self,
        user: dict,
        image_bytes: bytes,
        mime_type: str,
        target_company: Optional[str] = None,
        target_role: Optional[str] = None
    ) -> dict:
        prompt = resume_image_prompt(target_company, target_role)
        gap = self._run(
            lambda: self.ai_client.generate_with_image(prompt, image_bytes, mime_type),
            "Failed to analyze resume."
        )
        self._store(user["user_id"], "resume_image", gap, target_role=target_role, target_company=target_company)
        return {"gap": gap}

    def coding_recommendation(
        self,
        user: dict,
        target_role: Optional[str] = None,
        leetcode_stats: Optional[dict] = None,
        resume_text: Optional[str] = None
    ) -> dict:
        target_role = target_role or user.get("target_role")
        if not target_role:
            raise HTTPException(status_code=400, detail="Missing targetRole")

        prompt = coding_recommendation_prompt(target_role, leetcode_stats, resume_text)
        recommendation = self._run(
            lambda: self.ai_client.generate_text(prompt), "Failed to fetch Gemini recommendation"
        )
        self._store(user["user_id"], "recommendation", recommendation, target_role=target_role)
        return {"recommendation": recommendation}

    def list_reports(self, user_id: int, limit: int = 20) -> List[dict]:
        return self.reports.list_by_user(user_id, limit=limit)


def get_career_service() -> CareerCoachService:
    """Get career coaching service instance."""
    return CareerCoachService()
