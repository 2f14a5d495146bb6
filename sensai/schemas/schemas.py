"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import (
    AfterValidator, BaseModel, EmailStr, Field, HttpUrl, TypeAdapter, field_validator, model_validator
)
from typing import Annotated, Optional, List, Any, Dict, Union
from datetime import datetime


# ============================================================
# USER / ONBOARDING SCHEMAS
# ============================================================

def _split_skills(value):
    """Accept 'a, b, c' or ['a', 'b'] and return a clean list."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    return [str(s).strip() for s in value if str(s).strip()]


class OnboardingRequest(BaseModel):
    industry: str = Field(..., min_length=1, description="Please select an industry")
    sub_industry: str = Field(..., min_length=1, description="Please select a specialization")
    bio: Optional[str] = Field(None, max_length=500)
    experience: int = Field(..., ge=0, le=50)
    skills: Union[str, List[str], None] = None
    target_role: str = Field(..., min_length=1)

    @field_validator("skills")
    @classmethod
    def split_skills(cls, v):
        return _split_skills(v)


class ProfileUpdate(BaseModel):
    industry: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=500)
    experience: Optional[int] = Field(None, ge=0, le=50)
    skills: Union[str, List[str], None] = None
    target_role: Optional[str] = None
    leetcode_username: Optional[str] = None

    @field_validator("skills")
    @classmethod
    def split_skills(cls, v):
        return _split_skills(v)


class UserProfileResponse(BaseModel):
    user_id: int
    email: str
    name: Optional[str] = None
    image_url: Optional[str] = None
    industry: Optional[str] = None
    bio: Optional[str] = None
    experience: Optional[int] = None
    skills: List[str] = []
    target_role: Optional[str] = None
    leetcode_username: Optional[str] = None
    is_onboarded: bool = False
    created_at: datetime


class OnboardingStatusResponse(BaseModel):
    is_onboarded: bool


# ============================================================
# WEBHOOK SCHEMAS
# ============================================================

class WebhookEmailAddress(BaseModel):
    email_address: Optional[str] = None


class WebhookUserData(BaseModel):
    email_addresses: List[WebhookEmailAddress] = []
    first_name: Optional[str] = None


class UserRegisteredWebhook(BaseModel):
    type: Optional[str] = None
    data: WebhookUserData = WebhookUserData()


class WebhookResponse(BaseModel):
    success: bool
    welcome_sent: bool = False
    owner_notified: bool = False


# ============================================================
# INDUSTRY INSIGHT SCHEMAS
# ============================================================

class SalaryRange(BaseModel):
    role: str
    min: float
    max: float
    median: float
    location: str = ""


class IndustryInsightResponse(BaseModel):
    id: int
    industry: str
    salary_ranges: List[SalaryRange] = []
    growth_rate: float
    demand_level: str
    top_skills: List[str] = []
    market_outlook: str
    key_trends: List[str] = []
    recommended_skills: List[str] = []
    last_updated: datetime
    next_update: datetime


# ============================================================
# INTERVIEW SCHEMAS
# ============================================================

class QuizRequest(BaseModel):
    company: Optional[str] = None
    role: Optional[str] = None


class SectionedQuizRequest(BaseModel):
    company: Optional[str] = None
    role: Optional[str] = None


class QuizResponse(BaseModel):
    quiz: Dict[str, Any]
    questions: List[Dict[str, Any]] = []


class FeedbackRequest(BaseModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class FeedbackResponse(BaseModel):
    feedback: str


class QuizQuestion(BaseModel):
    question: str
    options: Optional[List[str]] = None
    correctAnswer: Optional[str] = None
    explanation: Optional[str] = None
    section: Optional[str] = None
    subsection: Optional[str] = None


class ProctoringSummary(BaseModel):
    """Counters collected in the browser while the quiz was open."""
    tab_switches: int = Field(0, ge=0)
    face_not_detected: int = Field(0, ge=0)
    multiple_faces: int = Field(0, ge=0)
    duration_seconds: Optional[int] = Field(None, ge=0)


class QuizResultRequest(BaseModel):
    questions: List[QuizQuestion]
    answers: List[Optional[str]]
    proctoring: Optional[ProctoringSummary] = None


class QuestionResult(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None
    user_answer: Optional[str] = None
    is_correct: bool
    explanation: Optional[str] = None
    section: Optional[str] = None


class AssessmentResponse(BaseModel):
    id: int
    user_id: int
    quiz_score: float
    questions: List[QuestionResult] = []
    category: str
    improvement_tip: Optional[str] = None
    section_scores: Optional[Dict[str, float]] = None
    proctoring: Optional[Dict[str, Any]] = None
    flagged: bool = False
    created_at: datetime


# ============================================================
# RESUME SCHEMAS
# ============================================================

_http_url = TypeAdapter(HttpUrl)


def _valid_url(value: str) -> str:
    """Check the URL but keep it exactly as the user typed it."""
    _http_url.validate_python(value)
    return value


UrlStr = Annotated[str, AfterValidator(_valid_url)]


class ContactInfo(BaseModel):
    # name / email presence is checked by the resume service
    name: Optional[str] = None
    location: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    linkedin: Optional[UrlStr] = None
    github: Optional[UrlStr] = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ResumeLink(BaseModel):
    label: str = Field(..., min_length=1)
    url: UrlStr


class SkillItem(BaseModel):
    text: str = Field(..., min_length=1)


class ResumeEntry(BaseModel):
    """Experience or project entry."""
    title: str = Field(..., min_length=1)
    organization: str = Field(..., min_length=1)
    start_date: str = Field(..., min_length=1)
    end_date: Optional[str] = None
    current: bool = False
    description: Optional[str] = None
    links: Optional[List[ResumeLink]] = None

    @model_validator(mode="after")
    def end_date_unless_current(self):
        if not self.current and not self.end_date:
            raise ValueError("End date is required unless this is your current position")
        return self


class EducationEntry(BaseModel):
    degree: str = Field(..., min_length=1)
    institution: str = Field(..., min_length=1)
    field_of_study: Optional[str] = None
    start_date: str = Field(..., min_length=1)
    end_date: Optional[str] = None
    current: bool = False
    description: Optional[str] = None
    gpa: Optional[str] = None


class Achievement(BaseModel):
    text: str = Field(..., min_length=1)
    url: Optional[UrlStr] = None


class ResumeSave(BaseModel):
    contact_info: ContactInfo
    skills: List[SkillItem] = Field(..., min_length=1, max_length=5)
    experience: List[ResumeEntry] = []
    education: List[EducationEntry] = []
    projects: List[ResumeEntry] = []
    achievements: Optional[List[Achievement]] = None


class ResumeResponse(BaseModel):
    id: str = Field(..., alias="_id")
    user_id: int
    contact_info: Dict[str, Any] = {}
    skills: List[Dict[str, Any]] = []
    experience: List[Dict[str, Any]] = []
    education: List[Dict[str, Any]] = []
    projects: List[Dict[str, Any]] = []
    achievements: List[Dict[str, Any]] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LatexImproveRequest(BaseModel):
    prompt: str = Field(..., min_length=1)
    current_latex: str = ""
    form_data: Optional[Dict[str, Any]] = None


class LatexImproveResponse(BaseModel):
    latex_code: str


class LatexCompileRequest(BaseModel):
    latex_code: str = ""


# ============================================================
# CAREER COACHING SCHEMAS
# ============================================================

class LeetCodeStats(BaseModel):
    totalSolved: Optional[int] = 0
    totalQuestions: Optional[int] = None
    easySolved: Optional[int] = 0
    mediumSolved: Optional[int] = 0
    hardSolved: Optional[int] = 0


class SkillGapRequest(BaseModel):
    target_role: Optional[str] = None
    skills: Union[str, List[str], None] = None
    leetcode_stats: Optional[LeetCodeStats] = None
    resume_text: Optional[str] = None

    @field_validator("skills")
    @classmethod
    def split_skills(cls, v):
        return _split_skills(v)


class SkillGapResponse(BaseModel):
    gap: str
    recommendations: List[str] = []


class ResumeAnalysisResponse(BaseModel):
    gap: str
    filename: Optional[str] = None


class RecommendationRequest(BaseModel):
    target_role: Optional[str] = None
    leetcode_stats: Optional[LeetCodeStats] = None
    resume_text: Optional[str] = None


class RecommendationResponse(BaseModel):
    recommendation: str


class CoachingReport(BaseModel):
    id: str = Field(..., alias="_id")
    kind: str
    target_role: Optional[str] = None
    target_company: Optional[str] = None
    content: str
    created_at: datetime

