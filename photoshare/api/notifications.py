"""Notification endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from photoshare.api.deps import get_current_user
from photoshare.database import get_session
from photoshare.models.user import User
from photoshare.schemas.auth import MessageResponse
from photoshare.schemas.notification import (
    NotificationResponse,
    NotificationWithDetailsResponse,
)
from photoshare.services.access_service import can_mark_notification
from photoshare.services.notification_service import (
    get_notification,
    list_user_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from photoshare.services.view_service import (
    build_notification_with_details,
    notification_to_response,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=list[NotificationWithDetailsResponse],
    response_model_exclude_unset=True,
)
def list_notifications(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """The caller's notifications, newest first, with sender/group/image attached."""
    return [
        build_notification_with_details(n, session)
        for n in list_user_notifications(user.id, session)
    ]


@router.put("/read-all", response_model=MessageResponse)
def read_all(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    mark_all_notifications_read(user.id, session)
    return MessageResponse(message="All notifications marked as read")


@router.put("/{notification_id}/read", response_model=NotificationResponse)
def read_one(
    notification_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    notification = get_notification(notification_id, session)
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    if not can_mark_notification(notification, user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only mark your own notifications as read",
        )
    return notification_to_response(mark_notification_read(notification, session))
