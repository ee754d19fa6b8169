"""Schemas for the profile and children endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ChildCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=21)
    interests: Optional[str] = Field(None, max_length=500)


class ChildRead(BaseModel):
    id: int
    name: str
    age: Optional[int] = None
    interests: Optional[str] = None

    model_config = {"from_attributes": True}


class ProfileData(BaseModel):
    user: UserRead
    children: list[ChildRead] = []
