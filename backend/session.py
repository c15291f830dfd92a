# backend/session.py

from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy.orm import Session

from config import Config
from models.database import get_db
from models import storage


@dataclass(frozen=True)
class SessionContext:
    user_id: int
    username: str
    is_admin: bool = False


def get_session_context(db: Session = Depends(get_db)) -> SessionContext:
    """Every request runs as the shared guest account; there is no per-user isolation."""
    guest = storage.ensure_guest_user(db, Config.GUEST_USERNAME, Config.GUEST_PASSWORD)
    return SessionContext(user_id=guest.id, username=guest.username)
