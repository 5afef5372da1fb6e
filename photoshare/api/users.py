"""User search endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from photoshare.api.deps import get_current_user
from photoshare.database import get_session
from photoshare.models.user import User
from photoshare.schemas.auth import UserResponse
from photoshare.services.auth_service import search_users
from photoshare.services.view_service import user_to_response

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/search", response_model=list[UserResponse])
def search(
    query: str | None = Query(default=None),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Find other users whose username contains the query (case-insensitive)."""
    if not query or not query.strip():
        raise HTTPException(status_code=400, detail="Search query is required")
    return [user_to_response(u) for u in search_users(query, user.id, session)]
