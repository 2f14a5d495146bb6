"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from sensai.api.routes.user_routes import router as user_router
from sensai.api.routes.webhook_routes import router as webhook_router
from sensai.api.routes.dashboard_routes import router as dashboard_router
from sensai.api.routes.interview_routes import router as interview_router
from sensai.api.routes.resume_routes import router as resume_router
from sensai.api.routes.career_routes import router as career_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(user_router)
api_router.include_router(webhook_router)
api_router.include_router(dashboard_router)
api_router.include_router(interview_router)
api_router.include_router(resume_router)
api_router.include_router(career_router)
