"""Registration, login and session endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel import Session

from photoshare.api.deps import get_current_user
from photoshare.config import settings
from photoshare.database import get_session
from photoshare.models.user import User
from photoshare.schemas.auth import CredentialsRequest, MessageResponse, UserResponse
from photoshare.services.auth_service import authenticate, create_user
from photoshare.services.view_service import user_to_response
from photoshare.utils.security import create_session_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _set_session_cookie(response: Response, user: User) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(user.id),
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


@router.post("/register", response_model=UserResponse, status_code=201)
def register(
    request: CredentialsRequest,
    response: Response,
    session: Session = Depends(get_session),
):
    """Create an account and start a session for it."""
    try:
        user = create_user(request.username, request.password, session)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _set_session_cookie(response, user)
    return user_to_response(user)


@router.post("/login", response_model=UserResponse)
def login(
    request: CredentialsRequest,
    response: Response,
    session: Session = Depends(get_session),
):
    user = authenticate(request.username, request.password, session)
    if not user:
        logger.info("Failed login for %s", request.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )
    _set_session_cookie(response, user)
    return user_to_response(user)


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response):
    """End the session. Always succeeds, signed in or not."""
    response.delete_cookie(key=settings.session_cookie_name)
    return MessageResponse(message="Logged out")


@router.get("/user", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    """Get the signed-in user."""
    return user_to_response(user)
