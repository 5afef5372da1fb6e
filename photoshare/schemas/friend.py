"""Friendship schemas."""

from typing import Literal

from pydantic import BaseModel

from photoshare.schemas.auth import UserResponse


class FriendRequestCreate(BaseModel):
    addressee_id: int


class FriendRequestRespond(BaseModel):
    status: str  # 'accepted' | 'declined', checked by the handler


class FriendshipResponse(BaseModel):
    id: int
    requester_id: int
    addressee_id: int
    status: Literal["pending", "accepted", "declined"]
    created_at: str


class FriendWithUserResponse(FriendshipResponse):
    user: UserResponse
