from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String
from sqlalchemy.orm import relationship

from sensai.db.postgres import Base


class DemandLevel(str, Enum):
    high = "High"
    medium = "Medium"
    low = "Low"


class MarketOutlook(str, Enum):
    positive = "Positive"
    neutral = "Neutral"
    negative = "Negative"


class IndustryInsight(Base):
    """AI-generated industry snapshot, shared by every user in the industry."""

    __tablename__ = "industry_insights"

    id = Column(Integer, primary_key=True, autoincrement=True)
    industry = Column(String(255), unique=True, nullable=False, index=True)

    # [{"role", "min", "max", "median", "location"}]
    salary_ranges = Column(JSON, default=list, nullable=False)
    growth_rate = Column(Float, default=0.0, nullable=False)
    demand_level = Column(String(20), default=DemandLevel.medium.value, nullable=False)
    top_skills = Column(JSON, default=list, nullable=False)
    market_outlook = Column(String(20), default=MarketOutlook.neutral.value, nullable=False)
    key_trends = Column(JSON, default=list, nullable=False)
    recommended_skills = Column(JSON, default=list, nullable=False)

    last_updated = Column(DateTime, default=datetime.utcnow, nullable=False)
    next_update = Column(DateTime, nullable=False, index=True)

    users = relationship("User", back_populates="industry_insight")

    def is_stale(self, now: datetime = None) -> bool:
        return self.next_update < (now or datetime.utcnow())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "industry": self.industry,
            "salary_ranges": self.salary_ranges or [],
            "growth_rate": self.growth_rate,
            "demand_level": self.demand_level,
            "top_skills": self.top_skills or [],
            "market_outlook": self.market_outlook,
            "key_trends": self.key_trends or [],
            "recommended_skills": self.recommended_skills or [],
            "last_updated": self.last_updated,
            "next_update": self.next_update,
        }
