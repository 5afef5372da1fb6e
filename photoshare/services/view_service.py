"""Composite response assembly.

Builds denormalized response objects from normalized rows. Missing
referenced rows are skipped or left out; nothing here raises for a
dangling foreign key and nothing here writes to the database.
"""

from datetime import datetime

from sqlmodel import Session, col, select

from photoshare.models.friendship import Friendship
from photoshare.models.group import Group
from photoshare.models.image import Image
from photoshare.models.notification import Notification
from photoshare.models.user import User
from photoshare.schemas.auth import UserResponse
from photoshare.schemas.friend import FriendshipResponse, FriendWithUserResponse
from photoshare.schemas.group import GroupResponse, GroupWithMembersResponse
from photoshare.schemas.image import ImageResponse, ImageSharesResponse, ImageWithSharesResponse
from photoshare.schemas.notification import (
    NotificationResponse,
    NotificationWithDetailsResponse,
)
from photoshare.services.group_service import list_group_member_ids
from photoshare.services.image_service import list_image_shares


def _iso(dt: datetime | None) -> str:
    return dt.isoformat() if dt else ""


def _users_by_id(user_ids: list[int], session: Session) -> dict[int, User]:
    """Resolve ids -> User for a batch; unknown ids are simply absent."""
    if not user_ids:
        return {}
    users = session.exec(select(User).where(col(User.id).in_(user_ids))).all()
    return {u.id: u for u in users}


# --- Flat rows ---

def user_to_response(u: User) -> UserResponse:
    return UserResponse(id=u.id, username=u.username, created_at=_iso(u.created_at))


def image_to_response(i: Image) -> ImageResponse:
    return ImageResponse(
        id=i.id,
        user_id=i.user_id,
        path=i.path,
        description=i.description,
        uploaded_at=_iso(i.uploaded_at),
    )


def group_to_response(g: Group) -> GroupResponse:
    return GroupResponse(
        id=g.id,
        name=g.name,
        description=g.description,
        created_by=g.created_by,
        created_at=_iso(g.created_at),
    )


def friendship_to_response(f: Friendship) -> FriendshipResponse:
    return FriendshipResponse(
        id=f.id,
        requester_id=f.requester_id,
        addressee_id=f.addressee_id,
        status=f.status,
        created_at=_iso(f.created_at),
    )


def notification_to_response(n: Notification) -> NotificationResponse:
    return NotificationResponse(**_notification_fields(n))


def _notification_fields(n: Notification) -> dict:
    return {
        "id": n.id,
        "user_id": n.user_id,
        "type": n.type,
        "content": n.content,
        "sender_id": n.sender_id,
        "group_id": n.group_id,
        "image_id": n.image_id,
        "is_read": bool(n.is_read),
        "created_at": _iso(n.created_at),
    }


# --- Composite views ---

def build_image_with_shares(image: Image, session: Session) -> ImageWithSharesResponse:
    """Split an image's shares into shared users and shared groups."""
    shares = list_image_shares(image.id, session)
    user_ids = list(dict.fromkeys(s.user_id for s in shares if s.user_id is not None))
    group_ids = list(dict.fromkeys(s.group_id for s in shares if s.group_id is not None))

    users = _users_by_id(user_ids, session)
    groups = {}
    if group_ids:
        groups = {
            g.id: g for g in session.exec(select(Group).where(col(Group.id).in_(group_ids))).all()
        }

    base = image_to_response(image)
    return ImageWithSharesResponse(
        **base.model_dump(),
        shares=ImageSharesResponse(
            users=[user_to_response(users[uid]) for uid in user_ids if uid in users],
            groups=[group_to_response(groups[gid]) for gid in group_ids if gid in groups],
        ),
    )


def build_friends_with_users(
    friendships: list[Friendship], viewer_id: int, session: Session
) -> list[FriendWithUserResponse]:
    """Attach the party other than the viewer to each friendship.

    For requests addressed to the viewer this is always the requester.
    Friendships whose other party no longer exists are dropped.
    """
    def other_party(f: Friendship) -> int:
        return f.addressee_id if f.requester_id == viewer_id else f.requester_id

    users = _users_by_id([other_party(f) for f in friendships], session)
    results = []
    for f in friendships:
        other = users.get(other_party(f))
        if other is None:
            continue
        results.append(FriendWithUserResponse(
            **friendship_to_response(f).model_dump(),
            user=user_to_response(other),
        ))
    return results


def build_group_with_members(group: Group, session: Session) -> GroupWithMembersResponse:
    member_ids = list_group_member_ids(group.id, session)
    users = _users_by_id(member_ids, session)
    return GroupWithMembersResponse(
        **group_to_response(group).model_dump(),
        members=[user_to_response(users[uid]) for uid in member_ids if uid in users],
    )


def build_notification_with_details(
    n: Notification, session: Session
) -> NotificationWithDetailsResponse:
    """Attach sender, group and image when their keys are set and still resolve."""
    details = NotificationWithDetailsResponse(**_notification_fields(n))

    if n.sender_id is not None:
        sender = session.get(User, n.sender_id)
        if sender:
            details.sender = user_to_response(sender)
    if n.group_id is not None:
        group = session.get(Group, n.group_id)
        if group:
            details.group = group_to_response(group)
    if n.image_id is not None:
        image = session.get(Image, n.image_id)
        if image:
            details.image = image_to_response(image)

    return details
