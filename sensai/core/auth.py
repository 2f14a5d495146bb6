"""
Authentication Utility - verifies tokens issued by the auth provider.

Provides:
- JWT token creation/verification
- First-login provisioning of the local user row
- FastAPI dependencies for protected routes

Sign-up, sign-in and password handling live with the provider; this
backend only trusts the bearer token it receives.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from sensai.core.config import get_settings
from sensai.db.postgres import get_db_session
from sensai.models import User

settings = get_settings()
logger = logging.getLogger(__name__)

# Bearer token extractor (auto_error off so a missing header is a 401, not a 403)
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token in the provider's format (scripts and tests)."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    if settings.jwt_audience:
        to_encode.setdefault("aud", settings.jwt_audience)
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"verify_aud": bool(settings.jwt_audience)}
        )
    except JWTError as e:
        logger.info("Rejected bearer token: %s", e)
        return None


def _find_user(auth_id: str) -> Optional[dict]:
    with get_db_session() as db:
        user = db.query(User).filter(User.auth_id == auth_id).first()
        return user.to_dict() if user else None


def get_or_create_user(claims: dict) -> dict:
    """
    Look up the user for the token subject, creating it on first login.
    """
    auth_id = claims["sub"]
    existing = _find_user(auth_id)
    if existing:
        return existing

    email = claims.get("email")
    if not email:
        raise HTTPException(status_code=400, detail="Token is missing the email claim")

    try:
        with get_db_session() as db:
            user = User(
                auth_id=auth_id,
                email=email,
                name=claims.get("name"),
                image_url=claims.get("picture"),
                skills=[]
            )
            db.add(user)
            db.flush()
            logger.info("Provisioned user %s for subject %s", user.id, auth_id)
            return user.to_dict()
    except IntegrityError:
        # another request provisioned the same subject first
        existing = _find_user(auth_id)
        if existing is None:
            logger.exception("Could not provision user for subject %s", auth_id)
            raise HTTPException(status_code=500, detail="Failed to provision user")
        return existing


def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise credentials_exception

    return get_or_create_user(payload)


async def get_onboarded_user(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require a completed onboarding (industry set)."""
    if not user["industry"]:
        raise HTTPException(status_code=400, detail="User industry not set")
    return user
