"""
Interview Routes

POST /interview/quiz - Generate a mock interview quiz
POST /interview/quiz/sections - Generate a quiz section by section
POST /interview/feedback - AI feedback on a free-text/voice answer
POST /interview/assessments - Save a finished quiz
GET /interview/assessments - List saved quizzes
"""

from fastapi import APIRouter, Depends, HTTPException
from typing import List

from sensai.core.auth import get_current_user
from sensai.services.interview_service import get_interview_service
from sensai.schemas.schemas import (
    AssessmentResponse, FeedbackRequest, FeedbackResponse, QuizRequest,
    QuizResponse, QuizResultRequest, SectionedQuizRequest
)

router = APIRouter(prefix="/interview", tags=["Interview"])


@router.post("/quiz", response_model=QuizResponse)
def generate_quiz(request: QuizRequest, user: dict = Depends(get_current_user)):
    """
    Generate a quiz tailored to company, role, and the user's industry/skills.

    Returns the nested section structure plus a flat question list.
    """
    service = get_interview_service()
    return service.generate_quiz(user, company=request.company, role=request.role)


@router.post("/quiz/sections", response_model=QuizResponse)
def generate_sectioned_quiz(request: SectionedQuizRequest, user: dict = Depends(get_current_user)):
    """Generate each quiz subsection with a separate (fast model) call."""
    if not request.company or not request.role:
        raise HTTPException(status_code=400, detail="Missing company or role")

    service = get_interview_service()
    return service.generate_sectioned_quiz(request.company, request.role)


@router.post("/feedback", response_model=FeedbackResponse)
def interview_feedback(request: FeedbackRequest, user: dict = Depends(get_current_user)):
    """Get 2-3 sentences of coaching on an answer."""
    service = get_interview_service()
    return FeedbackResponse(feedback=service.answer_feedback(request.question, request.answer))


@router.post("/assessments", response_model=AssessmentResponse, status_code=201)
def save_quiz_result(request: QuizResultRequest, user: dict = Depends(get_current_user)):
    """
    Grade and save a finished quiz.

    Includes an AI improvement tip when answers were wrong and the
    browser's proctoring summary (tab switches, face detection).
    """
    service = get_interview_service()
    return service.save_quiz_result(
        user,
        questions=[q.model_dump() for q in request.questions],
        answers=request.answers,
        proctoring=request.proctoring.model_dump() if request.proctoring else None
    )


@router.get("/assessments", response_model=List[AssessmentResponse])
def get_assessments(user: dict = Depends(get_current_user)):
    """Get all saved assessments, oldest first."""
    service = get_interview_service()
    return service.get_assessments(user["user_id"])
