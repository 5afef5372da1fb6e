"""Image request/response schemas."""

from typing import Optional

from pydantic import BaseModel

from photoshare.schemas.auth import UserResponse
from photoshare.schemas.group import GroupResponse


class ImageResponse(BaseModel):
    id: int
    user_id: int
    path: str
    description: Optional[str]
    uploaded_at: str


class ImageSharesResponse(BaseModel):
    users: list[UserResponse]
    groups: list[GroupResponse]


class ImageWithSharesResponse(ImageResponse):
    shares: ImageSharesResponse


class ImageMonthResponse(BaseModel):
    year: int
    month: int  # 0 = January
