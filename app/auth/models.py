# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying Supabase.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None


class UserResponse(BaseModel):
    """
    Account details shown on the My Page screen.
    """
    id: UUID
    email: Optional[str] = None
    provider: Optional[str] = None  # email, google, kakao
    created_at: Optional[datetime] = None


class PasswordChangeRequest(BaseModel):
    """
    New password for the current user.

    Length and confirmation are checked by the route so the errors can be
    localized.
    """
    new_password: Optional[str] = Field(default=None, description="New password (min 8 characters)")
    confirm_password: Optional[str] = Field(default=None, description="Must equal new_password")
    locale: Optional[str] = Field(default=None, description="Error message language")

