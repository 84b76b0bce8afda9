"""Admin authentication: credential check and the session guard for /admin."""

import logging
import secrets
from typing import Optional

import bcrypt
from fastapi import Request

from app.config import Settings

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


class LoginRequired(Exception):
    """Raised by :func:`require_admin` when the session has no admin user."""


def hash_password(password: str) -> str:
    """Return a bcrypt hash suitable for the ``ADMIN_PASSWORD_HASH`` setting."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_credentials(username: str, password: str, settings: Settings) -> bool:
    if not settings.admin_password_hash:
        logger.warning("Login attempted but ADMIN_PASSWORD_HASH is not configured")
        return False

    username_ok = secrets.compare_digest(username.encode("utf-8"), settings.admin_username.encode("utf-8"))
    try:
        password_ok = bcrypt.checkpw(
            password.encode("utf-8"), settings.admin_password_hash.encode("utf-8")
        )
    except ValueError:
        logger.error("ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
        return False
    return username_ok and password_ok


def current_user(request: Request) -> Optional[dict]:
    return request.session.get(SESSION_USER_KEY)


def login(request: Request, username: str) -> None:
    request.session[SESSION_USER_KEY] = {"username": username}


def logout(request: Request) -> None:
    request.session.clear()


def require_admin(request: Request) -> dict:
    """FastAPI dependency guarding every /admin route."""
    user = current_user(request)
    if not user:
        raise LoginRequired()
    return user
