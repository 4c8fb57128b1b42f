"""Admin login gate for the dashboard pages"""

import logging
import secrets
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from yc_registration.config import config

logger = logging.getLogger(__name__)

SESSION_FLAG = "is_admin_logged_in"


class AdminSession:
    """
    Admin login state for one browser session.

    Wraps the signed session cookie so routes receive the session as an
    explicit object instead of reading the cookie themselves. Credentials
    come from configuration; when they are not configured nobody can log in.
    """

    def __init__(self, session: dict, username: Optional[str], password: Optional[str]):
        self.session = session
        self._username = username
        self._password = password

    @classmethod
    def from_request(cls, request: Request) -> "AdminSession":
        return cls(
            request.session,
            username=config.get("admin_username"),
            password=config.get("admin_password"),
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.session.get(SESSION_FLAG))

    def check_credentials(self, username: str, password: str) -> bool:
        if not self._username or not self._password:
            logger.warning("ADMIN_USERNAME/ADMIN_PASSWORD not configured; admin login disabled")
            return False
        username_ok = secrets.compare_digest(username.encode(), self._username.encode())
        password_ok = secrets.compare_digest(password.encode(), self._password.encode())
        return username_ok and password_ok

    def login(self, username: str, password: str) -> bool:
        """Set the session flag if the credentials match"""
        if not self.check_credentials(username, password):
            logger.info("Failed admin login attempt")
            return False
        self.session[SESSION_FLAG] = True
        logger.info("Admin logged in")
        return True

    def logout(self) -> None:
        self.session.pop(SESSION_FLAG, None)


def get_admin_session(request: Request) -> AdminSession:
    return AdminSession.from_request(request)


def require_admin_session(
    request: Request, admin: AdminSession = Depends(get_admin_session)
) -> AdminSession:
    """
    Require a logged-in admin for web routes.

    Raises:
        HTTPException: 307 redirect to /admin/login if not logged in
    """
    if not admin.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
            headers={"Location": "/admin/login"},
        )
    return admin


def require_admin_api(
    admin: AdminSession = Depends(get_admin_session),
    x_admin_key: Optional[str] = Header(default=None),
) -> None:
    """
    Allow JSON routes for a logged-in admin or a matching X-Admin-Key header.

    Raises:
        HTTPException: 401 otherwise
    """
    if admin.is_authenticated:
        return

    expected_key = config.get("admin_api_key")
    if expected_key and x_admin_key and secrets.compare_digest(x_admin_key, expected_key):
        return

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid admin API key"
    )
