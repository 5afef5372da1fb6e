"""Friend request and friendship endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from photoshare.api.deps import get_current_user
from photoshare.database import get_session
from photoshare.models.user import User
from photoshare.schemas.friend import (
    FriendRequestCreate,
    FriendRequestRespond,
    FriendshipResponse,
    FriendWithUserResponse,
)
from photoshare.services.access_service import can_respond_to_friend_request
from photoshare.services.auth_service import get_user
from photoshare.services.friend_service import (
    RESPONSE_STATUSES,
    create_friend_request,
    get_friendship,
    list_friend_requests,
    list_friendships,
    respond_to_friend_request,
)
from photoshare.services.notification_service import (
    notify_friend_request,
    notify_friend_response,
)
from photoshare.services.view_service import build_friends_with_users, friendship_to_response

router = APIRouter(prefix="/friends", tags=["friends"])


@router.get("", response_model=list[FriendWithUserResponse])
def list_friends(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Accepted friends of the caller, each with the other user's record."""
    return build_friends_with_users(list_friendships(user.id, session), user.id, session)


@router.get("/requests", response_model=list[FriendWithUserResponse])
def list_requests(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Pending requests addressed to the caller, each with the requester."""
    return build_friends_with_users(list_friend_requests(user.id, session), user.id, session)


@router.post("/request", response_model=FriendshipResponse, status_code=201)
def send_request(
    request: FriendRequestCreate,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    if request.addressee_id != user.id and not get_user(request.addressee_id, session):
        raise HTTPException(status_code=404, detail="User not found")

    try:
        friendship = create_friend_request(user.id, request.addressee_id, session)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    notify_friend_request(user, request.addressee_id, session)
    return friendship_to_response(friendship)


@router.put("/requests/{request_id}", response_model=FriendshipResponse)
def respond_to_request(
    request_id: int,
    request: FriendRequestRespond,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Accept or decline a pending request addressed to the caller."""
    if request.status not in RESPONSE_STATUSES:
        raise HTTPException(
            status_code=400,
            detail="Invalid status. Must be 'accepted' or 'declined'",
        )

    friendship = get_friendship(request_id, session)
    if not friendship:
        raise HTTPException(status_code=404, detail="Friend request not found")
    if not can_respond_to_friend_request(friendship, user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only respond to your own friend requests",
        )

    try:
        friendship = respond_to_friend_request(friendship, request.status, session)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    notify_friend_response(user, friendship.requester_id, request.status, session)
    return friendship_to_response(friendship)
