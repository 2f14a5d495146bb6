"""
Career Coaching Routes

POST /career/skill-gap - AI skill gap analysis for the target role
POST /career/resume-analysis - Upload resume (PDF/DOCX/TXT) for skill gap analysis
POST /career/resume-image-analysis - Upload resume image for AI review
POST /career/recommendation - Coding interview tips from LeetCode stats
GET /career/reports - Previously generated reports
GET /career/leetcode-stats - LeetCode solved / topic stats
GET /career/resume-formats - Supported upload formats
"""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from typing import List, Optional

from sensai.core.auth import get_current_user
from sensai.services.career_service import get_career_service
from sensai.services.leetcode_client import get_leetcode_client
from sensai.utils.file_upload import extract_text_from_file, get_supported_formats, read_resume_image
from sensai.schemas.schemas import (
    CoachingReport, RecommendationRequest, RecommendationResponse,
    ResumeAnalysisResponse, SkillGapRequest, SkillGapResponse
)

router = APIRouter(prefix="/career", tags=["Career"])


def _dump(model):
    return model.model_dump() if model else None


@router.post("/skill-gap", response_model=SkillGapResponse)
def skill_gap(request: SkillGapRequest, user: dict = Depends(get_current_user)):
    """
    Analyze readiness for the target role.

    Target role and skills default to the user's profile.
    """
    service = get_career_service()
    return service.skill_gap(
        user,
        target_role=request.target_role,
        skills=request.skills,
        leetcode_stats=_dump(request.leetcode_stats),
        resume_text=request.resume_text
    )


@router.post("/resume-analysis", response_model=ResumeAnalysisResponse)
async def resume_analysis(
    file: UploadFile = File(..., description="Resume file (PDF, DOCX, or TXT)"),
    target_role: Optional[str] = Form(None),
    user: dict = Depends(get_current_user)
):
    """
    Extract resume text server-side and run the skill gap analysis on it.
    """
    resume_text, filename = await extract_text_from_file(file)

    service = get_career_service()
    result = await run_in_threadpool(
        service.skill_gap, user, target_role=target_role, resume_text=resume_text
    )
    return ResumeAnalysisResponse(gap=result["gap"], filename=filename)


@router.post("/resume-image-analysis")
async def resume_image_analysis(
    resume_image: UploadFile = File(..., description="Resume image (PNG or JPEG)"),
    target_company: Optional[str] = Form(None),
    target_role: Optional[str] = Form(None),
    user: dict = Depends(get_current_user)
):
    """Review a resume image with the vision model."""
    image_bytes, mime_type = await read_resume_image(resume_image)

    service = get_career_service()
    return await run_in_threadpool(
        service.analyze_resume_image, user, image_bytes, mime_type,
        target_company=target_company, target_role=target_role
    )


@router.post("/recommendation", response_model=RecommendationResponse)
def coding_recommendation(request: RecommendationRequest, user: dict = Depends(get_current_user)):
    """Coding interview readiness tips from LeetCode stats (and resume text)."""
    service = get_career_service()
    return service.coding_recommendation(
        user,
        target_role=request.target_role,
        leetcode_stats=_dump(request.leetcode_stats),
        resume_text=request.resume_text
    )


@router.get("/reports", response_model=List[CoachingReport])
def list_reports(
    limit: int = Query(20, ge=1, le=100),
    user: dict = Depends(get_current_user)
):
    """Previously generated coaching reports, newest first."""
    service = get_career_service()
    return service.list_reports(user["user_id"], limit=limit)


@router.get("/leetcode-stats")
def leetcode_stats(
    username: Optional[str] = Query(None),
    topics: bool = Query(False, description="Return topic/tag stats instead of solved counts")
):
    """Proxy the public LeetCode stats API."""
    if not username:
        raise HTTPException(status_code=400, detail="Missing username")

    client = get_leetcode_client()
    try:
        if topics:
            return client.topic_stats(username)
        return client.solved_stats(username)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/resume-formats")
async def resume_formats():
    """Get supported resume upload formats."""
    return get_supported_formats()
