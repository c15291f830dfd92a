# backend/models/user.py

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from models.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password = Column(String(128), nullable=False)   # sha256 hex digest

    humanized_texts = relationship("HumanizedText", back_populates="user")
    converted_files = relationship("ConvertedFile", back_populates="user")
