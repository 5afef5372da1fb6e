"""Image and ImageShare models."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel


class Image(SQLModel, table=True):
    __tablename__ = "images"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    path: str  # public URL path, e.g. /uploads/<file>
    description: Optional[str] = None
    uploaded_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )


class ImageShare(SQLModel, table=True):
    __tablename__ = "image_shares"
    __table_args__ = (
        CheckConstraint(
            "(user_id IS NULL) <> (group_id IS NULL)",
            name="ck_image_shares_one_target",
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    image_id: int = Field(foreign_key="images.id", index=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    group_id: Optional[int] = Field(default=None, foreign_key="groups.id", index=True)
    shared_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
