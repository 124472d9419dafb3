"""Pydantic models for authentication."""
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator


class UserRegister(BaseModel):
    """User sign-up request."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    university: str = Field(..., min_length=1, max_length=255)

    @field_validator("first_name", "last_name", "university")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("All fields are required")
        return value


class UserLogin(BaseModel):
    """User sign-in request."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    redirect_to: str | None = None
    has_completed_profile: bool | None = None


class UserResponse(BaseModel):
    """User response (public info)."""

    id: int
    email: str
    display_name: str | None
    university: str | None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class PasswordResetRequest(BaseModel):
    """Password change request for a signed-in user."""

    password: str = Field(..., min_length=6, max_length=100)
    confirm_password: str = Field(..., min_length=6, max_length=100)


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


class ProfileResponse(BaseModel):
    """User profile response."""

    id: int
    email: str
    first_name: str
    last_name: str
    display_name: str | None
    university: str | None
    level: str | None
    has_completed_profile: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdateRequest(BaseModel):
    """University info update request."""

    university: str = Field(..., min_length=1, max_length=255)
    level: str = Field(..., min_length=1, max_length=50)
    display_name: str | None = Field(None, max_length=201)
