import hmac
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from config import Config
from schemas import AdminLoginRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth")


def check_admin_credentials(email: str, password: str) -> bool:
    if not Config.ADMIN_EMAIL or not Config.ADMIN_PASSWORD:
        return False
    email_ok = hmac.compare_digest(email.strip().lower().encode(), Config.ADMIN_EMAIL.lower().encode())
    password_ok = hmac.compare_digest(password.encode(), Config.ADMIN_PASSWORD.encode())
    return email_ok and password_ok


@router.post("/admin")
def admin_login(payload: AdminLoginRequest):
    if not Config.ADMIN_EMAIL or not Config.ADMIN_PASSWORD:
        return JSONResponse(status_code=403, content={"message": "Admin login is not configured"})
    if not check_admin_credentials(payload.email, payload.password):
        logger.warning("Failed admin login for %s", payload.email)
        return JSONResponse(status_code=401, content={"message": "Invalid credentials"})
    return {"username": "Admin", "email": payload.email, "isAdmin": True}
