"""
User management schemas
"""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from netops_core.db.models import Role
from netops_core.validation import (
    normalize_email,
    reject_null,
    validate_password_bytes,
    validate_username,
)

from .common import CamelModel


class UserUpdate(CamelModel):
    """Schema for updating a user (admin only)"""
    username: Optional[str] = Field(None, min_length=3, max_length=30)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=72)
    role: Optional[Role] = None

    @field_validator('username', 'email', 'password', 'role')
    @classmethod
    def not_null(cls, v, info):
        return reject_null(v, info.field_name.capitalize())

    @field_validator('username')
    @classmethod
    def check_username(cls, v: str) -> str:
        return validate_username(v)

    @field_validator('email')
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator('password')
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password_bytes(v)
