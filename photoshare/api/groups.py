"""Group and membership endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from photoshare.api.deps import get_current_user
from photoshare.database import get_session
from photoshare.models.group import Group
from photoshare.models.user import User
from photoshare.schemas.auth import MessageResponse
from photoshare.schemas.group import (
    GroupCreateRequest,
    GroupMemberAddRequest,
    GroupResponse,
    GroupWithMembersResponse,
)
from photoshare.schemas.image import ImageResponse
from photoshare.services.access_service import can_remove_group_member, is_group_member
from photoshare.services.auth_service import get_user
from photoshare.services.group_service import (
    add_group_member,
    create_group,
    get_group,
    get_membership,
    list_user_groups,
    remove_group_member,
)
from photoshare.services.image_service import list_group_images
from photoshare.services.notification_service import notify_added_to_group
from photoshare.services.view_service import (
    build_group_with_members,
    group_to_response,
    image_to_response,
)

router = APIRouter(prefix="/groups", tags=["groups"])


def _get_member_group(group_id: int, user: User, session: Session) -> Group:
    """Load a group the caller belongs to: 404 if missing, 403 if not a member."""
    group = get_group(group_id, session)
    if not group:
        raise HTTPException(status_code=404, detail="Group not found")
    if not is_group_member(group_id, user.id, session):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not a member of this group",
        )
    return group


@router.get("", response_model=list[GroupResponse])
def list_groups(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Groups the caller is a member of."""
    return [group_to_response(g) for g in list_user_groups(user.id, session)]


@router.post("", response_model=GroupResponse, status_code=201)
def create(
    request: GroupCreateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    if not request.name.strip():
        raise HTTPException(status_code=400, detail="Group name is required")
    group = create_group(request.name, request.description, user.id, session)
    return group_to_response(group)


@router.get("/{group_id}", response_model=GroupWithMembersResponse)
def get_group_detail(
    group_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    group = _get_member_group(group_id, user, session)
    return build_group_with_members(group, session)


@router.post("/{group_id}/members", response_model=MessageResponse, status_code=201)
def add_member(
    group_id: int,
    request: GroupMemberAddRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Add a user to the group and notify them. Any member may add others."""
    group = _get_member_group(group_id, user, session)
    if not get_user(request.user_id, session):
        raise HTTPException(status_code=404, detail="User not found")

    try:
        add_group_member(group.id, request.user_id, session)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    notify_added_to_group(user, group, request.user_id, session)
    return MessageResponse(message="User added to group")


@router.delete("/{group_id}/members/{user_id}", response_model=MessageResponse)
def remove_member(
    group_id: int,
    user_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Leave a group, or (creator only) remove another member."""
    group = get_group(group_id, session)
    if not group:
        raise HTTPException(status_code=404, detail="Group not found")
    if not can_remove_group_member(group, user.id, user_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have permission to remove this member",
        )

    membership = get_membership(group_id, user_id, session)
    if not membership:
        raise HTTPException(status_code=404, detail="Member not found")

    remove_group_member(membership, session)
    return MessageResponse(message="Member removed from group")


@router.get("/{group_id}/images", response_model=list[ImageResponse])
def list_images(
    group_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Images shared with the group, most recent first."""
    _get_member_group(group_id, user, session)
    return [image_to_response(i) for i in list_group_images(group_id, session)]
