from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from sensai.db.postgres import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Subject claim of the auth provider's token
    auth_id = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(255))
    image_url = Column(String(500))

    industry = Column(String(255), ForeignKey("industry_insights.industry"), nullable=True)
    bio = Column(Text)
    experience = Column(Integer)
    skills = Column(JSON, default=list, nullable=False)
    target_role = Column(String(255))
    leetcode_username = Column(String(100))

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    industry_insight = relationship("IndustryInsight", back_populates="users")
    assessments = relationship(
        "Assessment", back_populates="user", order_by="Assessment.created_at", cascade="all, delete-orphan"
    )

    @property
    def is_onboarded(self) -> bool:
        return bool(self.industry)

    def to_dict(self) -> dict:
        return {
            "user_id": self.id,
            "auth_id": self.auth_id,
            "email": self.email,
            "name": self.name,
            "image_url": self.image_url,
            "industry": self.industry,
            "bio": self.bio,
            "experience": self.experience,
            "skills": list(self.skills or []),
            "target_role": self.target_role,
            "leetcode_username": self.leetcode_username,
            "is_onboarded": self.is_onboarded,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
