"""Pydantic schemas for reviews and their moderation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.enums import ResolveAction, ReviewStatus


class ReviewCreate(BaseModel):
    product_id: int
    score: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=1000)


class ReviewUpdate(BaseModel):
    score: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=1000)
    # Honoured for administrators only
    customer_id: Optional[str] = None
    created_at: Optional[datetime] = None
    version_id: Optional[int] = None


class ReviewRead(BaseModel):
    id: int
    product_id: int
    customer_id: str
    score: int
    comment: Optional[str] = None
    created_at: datetime
    is_reported: bool
    status: ReviewStatus
    version_id: int

    model_config = {"from_attributes": True}


class ModerationRequest(BaseModel):
    status: ReviewStatus


class ResolveRequest(BaseModel):
    action: ResolveAction


class ActionResult(BaseModel):
    success: bool = True
    message: str
