# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Account endpoints for signed-in users.
#
# Note: Signup, login and OAuth (Google, Kakao) are handled by Supabase Auth
# client-side. These routes cover what needs the service key: reading the
# account, changing the password and deleting the account.
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.auth.dependencies import get_current_user
from app.auth.errors import translate_auth_error
from app.auth.models import AuthUser, PasswordChangeRequest, UserResponse
from app.exceptions import InvalidPasswordError, StylistException
from core.locale import error_messages
from core.models.email import SuccessResponse
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

MIN_PASSWORD_LENGTH = 8


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current user's account details.

    Raises:
        401: If not authenticated
    """
    record = SupabaseClient.fetch_user(user.id)

    if record:
        app_metadata = record.get("app_metadata") or {}
        return UserResponse(
            id=user.id,
            email=record.get("email") or user.email,
            provider=app_metadata.get("provider"),
            created_at=record.get("created_at"),
        )

    # Token is valid but the admin lookup failed; answer from the token
    return UserResponse(id=user.id, email=user.email)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }


@router.post("/password", response_model=SuccessResponse)
async def change_password(
    request: PasswordChangeRequest,
    user: AuthUser = Depends(get_current_user)
) -> SuccessResponse:
    """
    Change the current user's password.

    Raises:
        400: Password too short, confirmation mismatch or rejected by Supabase
        401: If not authenticated
    """
    messages = error_messages(request.locale)

    if len(request.new_password or "") < MIN_PASSWORD_LENGTH:
        raise InvalidPasswordError(messages.password_too_short)

    if request.new_password != request.confirm_password:
        raise InvalidPasswordError(messages.password_mismatch)

    try:
        SupabaseClient.update_password(user.id, request.new_password)
    except SupabaseClientError as e:
        raise InvalidPasswordError(translate_auth_error(e.message, request.locale))

    return SuccessResponse()


@router.delete("/account", response_model=SuccessResponse)
async def delete_account(
    locale: Optional[str] = Query(default=None, description="Error message language"),
    user: AuthUser = Depends(get_current_user)
) -> SuccessResponse:
    """
    Permanently delete the current user's account.

    Raises:
        401: If not authenticated
        500: If Supabase refuses the deletion
    """
    try:
        SupabaseClient.delete_user(user.id)
    except SupabaseClientError as e:
        logger.error(f"Account deletion failed: {e}")
        raise StylistException(
            message=error_messages(locale).delete_failed,
            code="DELETE_FAILED",
            status_code=500,
        )

    return SuccessResponse()
