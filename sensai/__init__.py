"""
SensAI - AI Career Assistant
Onboarding, industry insights, mock interviews, resume building
and skill-gap analysis behind a single FastAPI backend.

Architecture:
- PostgreSQL: Structured data (users, industry insights, assessments)
- MongoDB: Documents (resume forms, AI skill-gap reports)
- Gemini AI: Insights, quizzes, feedback and coaching (not a database!)
"""

__version__ = "1.0.0"
