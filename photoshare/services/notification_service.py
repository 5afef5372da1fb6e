"""Notification dispatch and retrieval.

Dispatch runs after the triggering write has been committed. Notifications
are best-effort: a failed insert is rolled back and logged, and never undoes
the write that caused it.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from photoshare.models.group import Group
from photoshare.models.image import Image
from photoshare.models.notification import (
    FRIEND_REQUEST,
    GROUP_INVITE,
    IMAGE_SHARE,
    Notification,
)
from photoshare.models.user import User

logger = logging.getLogger(__name__)


def _dispatch(notifications: list[Notification], session: Session) -> int:
    """Persist a batch of notifications. Returns how many were stored."""
    if not notifications:
        return 0
    session.add_all(notifications)
    try:
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception(
            "Failed to store %d notification(s) of type %s",
            len(notifications), notifications[0].type,
        )
        return 0
    return len(notifications)


# --- Dispatchers ---

def notify_friend_request(requester: User, addressee_id: int, session: Session) -> int:
    return _dispatch([
        Notification(
            user_id=addressee_id,
            type=FRIEND_REQUEST,
            content=f"{requester.username} sent you a friend request",
            sender_id=requester.id,
        )
    ], session)


def notify_friend_response(
    responder: User, requester_id: int, status: str, session: Session
) -> int:
    return _dispatch([
        Notification(
            user_id=requester_id,
            type=FRIEND_REQUEST,
            content=f"{responder.username} {status} your friend request",
            sender_id=responder.id,
        )
    ], session)


def notify_image_shared_with_users(
    uploader: User, image: Image, user_ids: list[int], session: Session
) -> int:
    return _dispatch([
        Notification(
            user_id=uid,
            type=IMAGE_SHARE,
            content=f"{uploader.username} shared an image with you",
            sender_id=uploader.id,
            image_id=image.id,
        )
        for uid in user_ids
    ], session)


def notify_image_shared_with_group(
    uploader: User, image: Image, group: Group, member_ids: list[int], session: Session
) -> int:
    """Notify every member of the group except the uploader."""
    recipients = [uid for uid in dict.fromkeys(member_ids) if uid != uploader.id]
    return _dispatch([
        Notification(
            user_id=uid,
            type=IMAGE_SHARE,
            content=f"{uploader.username} shared an image in {group.name}",
            sender_id=uploader.id,
            image_id=image.id,
            group_id=group.id,
        )
        for uid in recipients
    ], session)


def notify_added_to_group(actor: User, group: Group, user_id: int, session: Session) -> int:
    return _dispatch([
        Notification(
            user_id=user_id,
            type=GROUP_INVITE,
            content=f'{actor.username} added you to the group "{group.name}"',
            sender_id=actor.id,
            group_id=group.id,
        )
    ], session)


# --- Queries ---

def get_notification(notification_id: int, session: Session) -> Notification | None:
    return session.get(Notification, notification_id)


def list_user_notifications(user_id: int, session: Session) -> list[Notification]:
    return list(session.exec(
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(col(Notification.created_at).desc(), col(Notification.id).desc())
    ).all())


def mark_notification_read(notification: Notification, session: Session) -> Notification:
    notification.is_read = True
    session.add(notification)
    session.commit()
    session.refresh(notification)
    return notification


def mark_all_notifications_read(user_id: int, session: Session) -> int:
    """Mark every unread notification of the user as read. Returns the count."""
    unread = session.exec(
        select(Notification).where(
            Notification.user_id == user_id,
            Notification.is_read == False,  # noqa: E712
        )
    ).all()
    for notification in unread:
        notification.is_read = True
        session.add(notification)
    session.commit()
    return len(unread)
