"""Notification model."""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

FRIEND_REQUEST = "friend_request"
GROUP_INVITE = "group_invite"
IMAGE_SHARE = "image_share"


class Notification(SQLModel, table=True):
    __tablename__ = "notifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)  # recipient
    type: str  # 'friend_request' | 'group_invite' | 'image_share'
    content: str
    sender_id: Optional[int] = Field(default=None, foreign_key="users.id")
    group_id: Optional[int] = Field(default=None, foreign_key="groups.id")
    image_id: Optional[int] = Field(default=None, foreign_key="images.id", index=True)
    is_read: bool = Field(default=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
