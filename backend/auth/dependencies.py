from fastapi import Depends, Request

import config
from auth.session import verify
from errors import InvalidSession


def current_user(request: Request) -> dict:
    """Session user decoded from the request's cookie (401 if absent or unreadable)."""
    return verify(request.cookies.get(config.SESSION_COOKIE_NAME))


def current_user_id(user: dict = Depends(current_user)) -> str:
    user_id = user.get("id")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidSession()
    return user_id
