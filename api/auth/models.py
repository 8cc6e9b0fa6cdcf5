# api/auth/models.py
"""
Pydantic models for authentication endpoints.
"""
from datetime import datetime
from pydantic import BaseModel, EmailStr, ConfigDict


class Token(BaseModel):
    """JWT token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefresh(BaseModel):
    """Request to refresh access token."""
    refresh_token: str


class LoginRequest(BaseModel):
    """Login credentials."""
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """User profile response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    business_unit_id: int | None = None
    is_active: bool
    created_at: datetime
    last_login: datetime | None = None


class SessionResponse(BaseModel):
    """Current session state as seen by the session gate."""
    authenticated: bool
    status: str
    user: UserResponse | None = None


class MessageResponse(BaseModel):
    message: str
