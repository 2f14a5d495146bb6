"""
Resume Service - resume builder persistence and AI LaTeX editing.
"""

import logging
from typing import Optional

from fastapi import HTTPException

from sensai.services.gemini_client import GeminiClient, ModelsOverloadedError, get_gemini_client, strip_code_fences
from sensai.services.mongo_service import ResumeDocumentService
from sensai.services.prompts import latex_improvement_prompt

logger = logging.getLogger(__name__)


class ResumeService:

    def __init__(self):
        self.documents = ResumeDocumentService()
        self.ai_client: GeminiClient = get_gemini_client()

    def save_resume(self, user_id: int, form_data: dict) -> dict:
        contact = form_data.get("contact_info") or {}
        if not contact.get("name") or not contact.get("email"):
            raise HTTPException(status_code=400, detail="Name and email are required")

        try:
            return self.documents.upsert(user_id, form_data)
        except Exception:
            logger.exception("Error saving resume")
            raise HTTPException(status_code=500, detail="Failed to save resume")

    def get_resume(self, user_id: int) -> Optional[dict]:
        return self.documents.get_by_user(user_id)

    def improve_latex(self, user_id: int, user_request: str, current_latex: str,
                      form_data: Optional[dict] = None) -> str:
        """
        Ask the model to rewrite the LaTeX source according to the user's request.
        Falls back to the stored resume when no form data is sent.
        """
        if form_data is None:
            stored = self.get_resume(user_id) or {}
            form_data = {k: v for k, v in stored.items() if k not in ("_id", "user_id")}

        prompt = latex_improvement_prompt(user_request, current_latex, form_data)
        try:
            latex_code = strip_code_fences(self.ai_client.generate_text(prompt))
        except ModelsOverloadedError as e:
            raise HTTPException(status_code=503, detail=str(e))
        except Exception as e:
            logger.exception("Error improving LaTeX")
            raise HTTPException(status_code=500, detail=str(e) or "Failed to get Gemini response")

        if not latex_code:
            raise HTTPException(status_code=502, detail="No LaTeX code received from Gemini")
        return latex_code


def get_resume_service() -> ResumeService:
    """Get resume service instance."""
    return ResumeService()
