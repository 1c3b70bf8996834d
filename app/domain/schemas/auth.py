"""Pydantic schemas for identity: registration, login and the current user."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    password: str = Field(min_length=6, max_length=100)


class UserRead(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    roles: list[str] = []

    model_config = {"from_attributes": True}

    @classmethod
    def from_user(cls, user) -> "UserRead":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            phone=user.phone,
            is_active=user.is_active,
            created_at=user.created_at,
            roles=sorted(user.role_names),
        )


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
