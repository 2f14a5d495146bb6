from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from sensai.db.postgres import Base


class Assessment(Base):
    __tablename__ = "assessments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    quiz_score = Column(Float, nullable=False)
    # [{"question", "answer", "user_answer", "is_correct", "explanation", "section"}]
    questions = Column(JSON, default=list, nullable=False)
    category = Column(String(50), default="Technical", nullable=False)
    improvement_tip = Column(Text)
    section_scores = Column(JSON)
    # Browser proctoring summary: tab switches, face detection counters
    proctoring = Column(JSON)
    flagged = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="assessments")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "quiz_score": self.quiz_score,
            "questions": self.questions or [],
            "category": self.category,
            "improvement_tip": self.improvement_tip,
            "section_scores": self.section_scores,
            "proctoring": self.proctoring,
            "flagged": self.flagged,
            "created_at": self.created_at,
        }
