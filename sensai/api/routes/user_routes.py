"""
User Routes

POST /users/onboarding - Complete onboarding (industry, role, skills)
GET /users/onboarding-status - Whether onboarding is complete
GET /users/profile - Get own profile
PUT /users/profile - Update profile
"""

from fastapi import APIRouter, Depends

from sensai.core.auth import get_current_user
from sensai.services.user_service import get_user_service
from sensai.schemas.schemas import (
    OnboardingRequest, OnboardingStatusResponse, ProfileUpdate, UserProfileResponse
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/onboarding", response_model=UserProfileResponse)
def onboarding(data: OnboardingRequest, user: dict = Depends(get_current_user)):
    """
    Complete onboarding.

    Industry insights for the chosen industry are generated on first use,
    so the first user of an industry waits for one AI call.
    """
    service = get_user_service()
    return service.onboard(user["user_id"], data.model_dump())


@router.get("/onboarding-status", response_model=OnboardingStatusResponse)
def onboarding_status(user: dict = Depends(get_current_user)):
    """Check whether the current user has completed onboarding."""
    return OnboardingStatusResponse(is_onboarded=user["is_onboarded"])


@router.get("/profile", response_model=UserProfileResponse)
def get_profile(user: dict = Depends(get_current_user)):
    """Get current user's profile."""
    return user


@router.put("/profile", response_model=UserProfileResponse)
def update_profile(data: ProfileUpdate, user: dict = Depends(get_current_user)):
    """Update profile. Only provided fields are updated."""
    service = get_user_service()
    return service.update_profile(user["user_id"], data.model_dump(exclude_none=True))
