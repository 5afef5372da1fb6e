"""Auth and user request/response schemas."""

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    id: int
    username: str
    created_at: str


class MessageResponse(BaseModel):
    message: str
