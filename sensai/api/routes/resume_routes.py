"""
Resume Routes

PUT /resume - Save resume builder form
GET /resume - Get saved resume
POST /resume/latex/improve - Let the AI edit the LaTeX source
POST /resume/compile - Compile LaTeX to PDF
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from sensai.core.auth import get_current_user
from sensai.services.latex_service import compile_latex
from sensai.services.resume_service import get_resume_service
from sensai.schemas.schemas import (
    LatexCompileRequest, LatexImproveRequest, LatexImproveResponse, ResumeResponse, ResumeSave
)

router = APIRouter(prefix="/resume", tags=["Resume"])


@router.put("", response_model=ResumeResponse)
def save_resume(data: ResumeSave, user: dict = Depends(get_current_user)):
    """Create or update the user's resume."""
    service = get_resume_service()
    return service.save_resume(user["user_id"], data.model_dump(mode="json"))


@router.get("", response_model=ResumeResponse)
def get_resume(user: dict = Depends(get_current_user)):
    """Get the user's saved resume."""
    service = get_resume_service()
    resume = service.get_resume(user["user_id"])
    if not resume:
        raise HTTPException(status_code=404, detail="Resume not found")
    return resume


@router.post("/latex/improve", response_model=LatexImproveResponse)
def improve_latex(request: LatexImproveRequest, user: dict = Depends(get_current_user)):
    """
    Apply a natural-language edit request to the LaTeX source.

    Uses the saved resume as context when form_data is not sent.
    """
    service = get_resume_service()
    latex_code = service.improve_latex(
        user["user_id"], request.prompt, request.current_latex, request.form_data
    )
    return LatexImproveResponse(latex_code=latex_code)


@router.post("/compile")
def compile_resume(request: LatexCompileRequest, user: dict = Depends(get_current_user)):
    """Compile LaTeX source with pdflatex and download the PDF."""
    pdf = compile_latex(request.latex_code)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="resume.pdf"'}
    )
