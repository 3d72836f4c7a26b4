# school_admin/schemas/auth_schemas.py
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from .common import CamelModel
from ..models.admin import AdminRole


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None


class ChangePasswordRequest(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class AdminOut(CamelModel):
    id: UUID
    name: str
    email: str
    role: AdminRole
    is_active: bool = True
    last_login: Optional[datetime] = None
