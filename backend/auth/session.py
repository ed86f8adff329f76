"""
Cookie-backed sessions.

The session cookie holds the user object {"id", "email"} as plain JSON.
There is no signature and no server-side session table: whatever JSON the
client sends back is trusted as the caller's identity.
"""

import json
import re
import time
from typing import Optional

from fastapi import Response

import config
from errors import InvalidSession, Unauthorized, ValidationError
from models.user import SessionUser

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def user_id_for_email(email: str) -> str:
    """Deterministic id: user_ + email with every non-alphanumeric char replaced by _."""
    return "user_" + _NON_ALNUM.sub("_", email)


def login(email: Optional[str]) -> tuple[SessionUser, str]:
    """Validate the email and build the session user plus a display token."""
    if not email:
        raise ValidationError("Email is required")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email format")

    user = SessionUser(id=user_id_for_email(email), email=email)
    token = f"token_{int(time.time() * 1000)}"
    return user, token


def encode_session(user: SessionUser) -> str:
    return json.dumps(user.model_dump(), separators=(",", ":"))


def verify(cookie: Optional[str]) -> dict:
    """
    Decode the session cookie.

    Raises Unauthorized when the cookie is missing and InvalidSession when it
    isn't a JSON object. Returns the decoded object as-is.
    """
    if cookie is None:
        raise Unauthorized()

    try:
        user = json.loads(cookie)
    except ValueError:
        raise InvalidSession()

    if not isinstance(user, dict):
        raise InvalidSession()
    return user


def set_session_cookie(response: Response, user: SessionUser) -> None:
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=encode_session(user),
        max_age=config.SESSION_MAX_AGE,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value="",
        max_age=0,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite="lax",
    )
