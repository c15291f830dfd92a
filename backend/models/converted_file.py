# backend/models/converted_file.py

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from models.database import Base


class ConvertedFile(Base):
    __tablename__ = "converted_files"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    original_filename = Column(String(500), nullable=False)
    converted_filename = Column(String(500), nullable=False)
    original_format = Column(String(50), nullable=False)
    converted_format = Column(String(50), nullable=False)
    operation = Column(String(50), nullable=False)      # convert, compress, merge, split, edit
    file_size = Column(Integer, nullable=False)
    download_url = Column(String(500), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="converted_files")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "originalFilename": self.original_filename,
            "convertedFilename": self.converted_filename,
            "originalFormat": self.original_format,
            "convertedFormat": self.converted_format,
            "operation": self.operation,
            "fileSize": self.file_size,
            "downloadUrl": self.download_url,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
