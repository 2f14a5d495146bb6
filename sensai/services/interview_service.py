"""
Interview Service - AI mock interview quizzes and saved assessments.

Quiz generation:
1. Full quiz in a single prompt (company/role/industry aware)
2. Sectioned quiz - one cheap-model call per subsection

Assessment saving:
1. Grade answers against the correct answers
2. Ask the model for one improvement tip when something was wrong
3. Store the attempt with the browser's proctoring summary
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from sensai.core.config import get_settings
from sensai.db.postgres import get_db_session
from sensai.models import Assessment
from sensai.services.gemini_client import GeminiClient, ModelsOverloadedError, get_gemini_client
from sensai.services.prompts import (
    answer_feedback_prompt,
    improvement_tip_prompt,
    quiz_prompt,
    subsection_questions_prompt
)

settings = get_settings()
logger = logging.getLogger(__name__)

# (section, [(subsection, question count)])
QUIZ_SECTIONS = [
    ("Aptitude", [
        ("Logical Reasoning", 5),
        ("Critical Reasoning", 5),
        ("Quantitative Aptitude", 5),
        ("Data Interpretation", 5),
    ]),
    ("CS Fundamentals", [
        ("DSA", 2),
        ("Operating Systems", 2),
        ("Databases", 2),
        ("Networking", 2),
        ("OOP/Software Engineering", 2),
    ]),
    ("Behavioral & Communication", [
        ("Behavioral", 2),
        ("Situational", 2),
        ("Communication/Presentation", 2),
    ]),
]


def flatten_quiz(quiz: Dict[str, Any]) -> List[dict]:
    """
    Flatten {section: {subsection: [questions]}} into one list,
    tagging every question with its section and subsection.
    """
    questions = []
    if not isinstance(quiz, dict):
        return questions
    for section, subsections in quiz.items():
        if isinstance(subsections, list):
            subsections = {section: subsections}
        if not isinstance(subsections, dict):
            continue
        for subsection, items in subsections.items():
            if not isinstance(items, list):
                continue
            for item in items:
                if isinstance(item, dict) and item.get("question"):
                    questions.append({**item, "section": section, "subsection": subsection})
    return questions


def grade_answers(questions: List[dict], answers: List[Optional[str]]) -> List[dict]:
    """Build per-question results. Open-ended questions (no correct answer) are never correct."""
    results = []
    for question, user_answer in zip(questions, answers):
        correct = question.get("correctAnswer")
        results.append({
            "question": question.get("question"),
            "answer": correct,
            "user_answer": user_answer,
            "is_correct": correct is not None and correct == user_answer,
            "explanation": question.get("explanation"),
            "section": question.get("section")
        })
    return results


def score_results(results: List[dict]) -> float:
    """Percentage of correct answers over every question in the attempt."""
    if not results:
        return 0.0
    correct = sum(1 for r in results if r["is_correct"])
    return correct / len(results) * 100


def section_scores(results: List[dict]) -> Optional[Dict[str, float]]:
    grouped: Dict[str, List[dict]] = {}
    for result in results:
        if result.get("section"):
            grouped.setdefault(result["section"], []).append(result)
    if not grouped:
        return None
    return {section: score_results(items) for section, items in grouped.items()}


class InterviewService:
    """
    Quiz generation, answer feedback and assessment persistence.
    """

    def __init__(self):
        self.ai_client: GeminiClient = get_gemini_client()

    # ------------------------------------------------------------
    # Quiz generation
    # ------------------------------------------------------------

    def generate_quiz(self, user: dict, company: Optional[str] = None, role: Optional[str] = None) -> dict:
        industry = user.get("industry") or role or ""
        prompt = quiz_prompt(company, role, industry, user.get("skills") or [])
        try:
            response = self.ai_client.generate_text(prompt)
            quiz = self.ai_client.extract_json(response)
        except ModelsOverloadedError as e:
            raise HTTPException(status_code=503, detail=str(e))
        except Exception as e:
            logger.exception("Error generating quiz")
            raise HTTPException(status_code=500, detail=str(e) or "Failed to generate quiz")

        if not isinstance(quiz, dict):
            raise HTTPException(status_code=500, detail="Failed to generate quiz")
        return {"quiz": quiz, "questions": flatten_quiz(quiz)}

    def _generate_subsection(self, section: str, subsection: str, count: int, company: str, role: str) -> list:
        prompt = subsection_questions_prompt(section, subsection, count, company, role)
        response = self.ai_client.generate_text(prompt, models=[settings.gemini_fast_model])
        try:
            questions = self.ai_client.extract_json(response)
        except ValueError:
            logger.warning("Unparseable %s / %s questions, skipping", section, subsection)
            return []
        return questions if isinstance(questions, list) else []

    def generate_sectioned_quiz(self, company: str, role: str) -> dict:
        quiz = {}
        try:
            for section, subsections in QUIZ_SECTIONS:
                quiz[section] = {}
                for subsection, count in subsections:
                    quiz[section][subsection] = self._generate_subsection(section, subsection, count, company, role)
        except ModelsOverloadedError as e:
            raise HTTPException(status_code=503, detail=str(e))
        except Exception:
            logger.exception("Error generating sectioned quiz")
            raise HTTPException(status_code=500, detail="Failed to generate quiz")
        return {"quiz": quiz, "questions": flatten_quiz(quiz)}

    def answer_feedback(self, question: str, answer: str) -> str:
        try:
            response = self.ai_client.generate_text(answer_feedback_prompt(question, answer))
        except Exception as e:
            logger.error("Error getting interview feedback: %s", e)
            raise HTTPException(status_code=400, detail=str(e) or "Failed to get feedback.")
        return response.strip()

    # ------------------------------------------------------------
    # Assessments
    # ------------------------------------------------------------

    def _improvement_tip(self, industry: str, wrong_answers: List[dict]) -> Optional[str]:
        try:
            tip = self.ai_client.generate_text(improvement_tip_prompt(industry, wrong_answers))
            return tip.strip() or None
        except Exception as e:
            # tip is optional; the attempt is still saved
            logger.error("Error generating improvement tip: %s", e)
            return None

    def save_quiz_result(self, user: dict, questions: List[dict], answers: List[Optional[str]],
                         proctoring: Optional[dict] = None) -> dict:
        if not questions:
            raise HTTPException(status_code=400, detail="No questions to save")
        if len(questions) != len(answers):
            raise HTTPException(status_code=400, detail="Answers do not match questions")

        results = grade_answers(questions, answers)
        wrong = [r for r in results if not r["is_correct"] and r["answer"] is not None]
        improvement_tip = self._improvement_tip(user.get("industry") or "", wrong) if wrong else None

        flagged = False
        if proctoring:
            flagged = proctoring.get("tab_switches", 0) > settings.proctoring_tab_switch_limit

        try:
            with get_db_session() as db:
                assessment = Assessment(
                    user_id=user["user_id"],
                    quiz_score=score_results(results),
                    questions=results,
                    category="Technical",
                    improvement_tip=improvement_tip,
                    section_scores=section_scores(results),
                    proctoring=proctoring,
                    flagged=flagged
                )
                db.add(assessment)
                db.flush()
                return assessment.to_dict()
        except Exception:
            logger.exception("Error saving quiz result")
            raise HTTPException(status_code=500, detail="Failed to save quiz result")

    def get_assessments(self, user_id: int) -> List[dict]:
        try:
            with get_db_session() as db:
                rows = (
                    db.query(Assessment)
                    .filter(Assessment.user_id == user_id)
                    .order_by(Assessment.created_at.asc(), Assessment.id.asc())
                    .all()
                )
                return [row.to_dict() for row in rows]
        except Exception:
            logger.exception("Error fetching assessments")
            raise HTTPException(status_code=500, detail="Failed to fetch assessments")


def get_interview_service() -> InterviewService:
    """Get interview service instance."""
    return InterviewService()
