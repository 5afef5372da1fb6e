"""Friendship model."""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

PENDING = "pending"
ACCEPTED = "accepted"
DECLINED = "declined"


def make_pair_key(user_a: int, user_b: int) -> str:
    """Order-independent key for a pair of users."""
    low, high = sorted((user_a, user_b))
    return f"{low}:{high}"


class Friendship(SQLModel, table=True):
    __tablename__ = "friendships"

    id: Optional[int] = Field(default=None, primary_key=True)
    requester_id: int = Field(foreign_key="users.id", index=True)
    addressee_id: int = Field(foreign_key="users.id", index=True)
    status: str = Field(default=PENDING)  # 'pending' | 'accepted' | 'declined'
    pair_key: str = Field(unique=True)  # one row per unordered pair
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
