"""User-related schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.user import UserRole, UserStatus


class UserCreate(BaseModel):
    """Payload for creating a staff user."""

    business_id: uuid.UUID
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=8)
    first_name: str
    last_name: str
    role: UserRole = UserRole.STAFF
    status: UserStatus = UserStatus.ACTIVE


class UserRead(BaseModel):
    """Serialized user without credentials."""

    id: uuid.UUID
    business_id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    role: UserRole
    status: UserStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
