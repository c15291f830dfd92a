# backend/models/humanized_text.py

from sqlalchemy import Column, Integer, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from models.database import Base


class HumanizedText(Base):
    __tablename__ = "humanized_texts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    original_text = Column(Text, nullable=False)
    humanized_text = Column(Text, nullable=False)
    options = Column(JSON, nullable=False)
    plagiarism_score = Column(JSON)
    ai_detection = Column(JSON)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="humanized_texts")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "originalText": self.original_text,
            "humanizedText": self.humanized_text,
            "options": self.options,
            "plagiarismScore": self.plagiarism_score,
            "aiDetection": self.ai_detection,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
