"""Authorization rules for images, groups, friendships and notifications.

Every predicate here is a pure lookup: callers decide whether a False means
404 or 403 based on whether the resource itself exists.
"""

from sqlmodel import Session, col, select

from photoshare.models.friendship import Friendship
from photoshare.models.group import Group, GroupMember
from photoshare.models.image import Image, ImageShare
from photoshare.models.notification import Notification


def is_group_member(group_id: int, user_id: int, session: Session) -> bool:
    membership = session.exec(
        select(GroupMember).where(
            GroupMember.group_id == group_id,
            GroupMember.user_id == user_id,
        )
    ).first()
    return membership is not None


def has_image_access(user_id: int, image_id: int, session: Session) -> bool:
    """True if the user owns the image, or it is shared with them directly
    or with a group they belong to."""
    image = session.get(Image, image_id)
    if image is None:
        return False
    if image.user_id == user_id:
        return True

    direct = session.exec(
        select(ImageShare).where(
            ImageShare.image_id == image_id,
            ImageShare.user_id == user_id,
        )
    ).first()
    if direct is not None:
        return True

    member_group_ids = select(GroupMember.group_id).where(GroupMember.user_id == user_id)
    via_group = session.exec(
        select(ImageShare).where(
            ImageShare.image_id == image_id,
            col(ImageShare.group_id).in_(member_group_ids),
        )
    ).first()
    return via_group is not None


def can_modify_image(image: Image, user_id: int) -> bool:
    return image.user_id == user_id


def can_remove_group_member(group: Group, actor_id: int, member_id: int) -> bool:
    """Members may remove themselves; only the creator may remove others."""
    return actor_id == member_id or group.created_by == actor_id


def can_respond_to_friend_request(friendship: Friendship, user_id: int) -> bool:
    return friendship.addressee_id == user_id


def can_mark_notification(notification: Notification, user_id: int) -> bool:
    return notification.user_id == user_id
