"""Common API dependencies: current user extraction from the session cookie."""

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie
from sqlmodel import Session

from photoshare.config import settings
from photoshare.database import get_session
from photoshare.models.user import User
from photoshare.utils.security import decode_session_token

session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def get_current_user(
    token: str | None = Depends(session_cookie),
    session: Session = Depends(get_session),
) -> User:
    """Resolve the signed-in user from the session cookie."""
    if not token:
        raise _unauthorized()
    try:
        payload = decode_session_token(token)
    except jwt.PyJWTError:
        raise _unauthorized()

    if payload.get("type") != "session":
        raise _unauthorized()

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized()

    user = session.get(User, user_id)
    if not user:
        raise _unauthorized()
    return user
