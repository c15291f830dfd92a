# backend/models/storage.py
# Persistence helpers shared by the routers.

import hashlib
import logging

from sqlalchemy.orm import Session

from models.user import User
from models.humanized_text import HumanizedText
from models.converted_file import ConvertedFile

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


# -------------------------------
# users
# -------------------------------
def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, username: str, password: str) -> User:
    user = User(username=username, password=hash_password(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def ensure_guest_user(db: Session, username: str, password: str) -> User:
    """Return the shared guest account, creating it on first use."""
    user = get_user_by_username(db, username)
    if user:
        logger.debug("Guest user already exists with id %s", user.id)
        return user
    user = create_user(db, username, password)
    logger.info("Guest user created with id %s", user.id)
    return user


# -------------------------------
# humanized texts
# -------------------------------
def create_humanized_text(
    db: Session,
    user_id: int,
    original_text: str,
    humanized_text: str,
    options: dict,
    plagiarism_score: dict,
    ai_detection: dict,
) -> HumanizedText:
    record = HumanizedText(
        user_id=user_id,
        original_text=original_text,
        humanized_text=humanized_text,
        options=options,
        plagiarism_score=plagiarism_score,
        ai_detection=ai_detection,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def get_humanized_texts(db: Session, user_id: int) -> list[HumanizedText]:
    return (
        db.query(HumanizedText)
        .filter(HumanizedText.user_id == user_id)
        .order_by(HumanizedText.id.desc())
        .all()
    )


# -------------------------------
# converted files
# -------------------------------
def create_converted_file(
    db: Session,
    user_id: int,
    original_filename: str,
    converted_filename: str,
    original_format: str,
    converted_format: str,
    operation: str,
    file_size: int,
    download_url: str,
) -> ConvertedFile:
    record = ConvertedFile(
        user_id=user_id,
        original_filename=original_filename,
        converted_filename=converted_filename,
        original_format=original_format,
        converted_format=converted_format,
        operation=operation,
        file_size=file_size,
        download_url=download_url,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def get_converted_files(db: Session, user_id: int) -> list[ConvertedFile]:
    return (
        db.query(ConvertedFile)
        .filter(ConvertedFile.user_id == user_id)
        .order_by(ConvertedFile.id.desc())
        .all()
    )
