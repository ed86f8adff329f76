import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Response
from pydantic import BaseModel

from auth.dependencies import current_user
from auth.session import clear_session_cookie, login, set_session_cookie
from models.user import SessionUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["session"])


# ---------- Request / Response schemas ----------

class LoginRequest(BaseModel):
    email: Optional[str] = None


class LoginResponse(BaseModel):
    user: SessionUser
    token: str


# ---------- Endpoints ----------

@router.post("/login", response_model=LoginResponse)
async def login_user(response: Response, body: Optional[LoginRequest] = Body(default=None)):
    """
    Starts a session for the given email.
    The user id is derived from the email, so logging in twice yields the same id.
    """
    user, token = login(body.email if body else None)
    set_session_cookie(response, user)

    logger.info("Session started for %s", user.id)
    return LoginResponse(user=user, token=token)


@router.post("/logout")
async def logout_user(response: Response):
    """Clears the session cookie. Always succeeds."""
    clear_session_cookie(response)
    return {"success": True}


@router.get("/verify")
async def verify_session(user: dict = Depends(current_user)):
    """Returns the user stored in the session cookie, unchanged."""
    return {"user": user}
