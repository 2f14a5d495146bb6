"""
Models module - SQLAlchemy ORM models (PostgreSQL tables).

- User: onboarding profile, keyed on the auth provider's subject
- IndustryInsight: AI-generated insight, one row per industry
- Assessment: saved mock interview attempts
"""

from sensai.models.user import User
from sensai.models.industry_insight import IndustryInsight, DemandLevel, MarketOutlook
from sensai.models.assessment import Assessment

__all__ = ["User", "IndustryInsight", "DemandLevel", "MarketOutlook", "Assessment"]
