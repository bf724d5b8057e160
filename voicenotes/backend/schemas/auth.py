"""
Auth Schemas.

Registration, login, and identity payloads.
"""

from datetime import datetime

from pydantic import EmailStr, Field

from voicenotes.backend.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class PasswordResetRequest(CamelModel):
    email: EmailStr


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    created_at: datetime


class AuthResponse(CamelModel):
    """Returned by register and login."""

    user: UserResponse
    token: str
    token_type: str = "bearer"
