"""Group and membership schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from photoshare.schemas.auth import UserResponse


class GroupCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class GroupMemberAddRequest(BaseModel):
    user_id: int


class GroupResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    created_by: int
    created_at: str


class GroupWithMembersResponse(GroupResponse):
    members: list[UserResponse]
