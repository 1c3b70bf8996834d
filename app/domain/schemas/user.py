"""Pydantic schemas for customers, administrators and user administration."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.domain.enums import RoleName


class CustomerRead(BaseModel):
    id: str
    address: Optional[str] = None
    complement: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    version_id: int

    model_config = {"from_attributes": True}


class CustomerUpdate(BaseModel):
    address: Optional[str] = Field(default=None, max_length=500)
    complement: Optional[str] = Field(default=None, max_length=100)
    city: Optional[str] = Field(default=None, max_length=50)
    state: Optional[str] = Field(default=None, max_length=50)
    postal_code: Optional[str] = Field(default=None, max_length=20)
    version_id: Optional[int] = None


class AdministratorRead(BaseModel):
    id: str
    job_title: str
    hired_at: datetime

    model_config = {"from_attributes": True}


class AdminUserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    password: str = Field(min_length=6, max_length=100)
    role: RoleName
    job_title: Optional[str] = Field(default=None, max_length=100)


class AdminUserUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    role: Optional[str] = None
