"""
Authentication schemas
"""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from netops_core.db.models import Role
from netops_core.validation import normalize_email, validate_password_bytes, validate_username

from .common import CamelModel


class RegisterRequest(CamelModel):
    """Register request body"""
    username: str = Field(..., min_length=3, max_length=30, description="Letters, numbers and underscores")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    role: Optional[Role] = None

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


class LoginRequest(CamelModel):
    """Login request body"""
    email: EmailStr
    password: str = Field(..., min_length=1, description="Password")

    @field_validator('email')
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)
