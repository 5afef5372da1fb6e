"""Notification schemas."""

from typing import Optional

from pydantic import BaseModel

from photoshare.schemas.auth import UserResponse
from photoshare.schemas.group import GroupResponse
from photoshare.schemas.image import ImageResponse


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    type: str
    content: str
    sender_id: Optional[int] = None
    group_id: Optional[int] = None
    image_id: Optional[int] = None
    is_read: bool
    created_at: str


class NotificationWithDetailsResponse(NotificationResponse):
    # Present only when the referenced row still exists
    sender: Optional[UserResponse] = None
    group: Optional[GroupResponse] = None
    image: Optional[ImageResponse] = None
