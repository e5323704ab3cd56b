# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase Auth admin operations.
# It implements the singleton pattern to reuse a single client connection
# and provides methods for:
# - Fetching a user's auth record
# - Changing a user's password
# - Deleting a user account
#
# Sign-up, sign-in and OAuth happen client-side with the anon key; the
# server only acts on users that already presented a valid JWT.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   SupabaseClient.update_password(user_id, "new-password")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    `message` keeps Supabase's own (English) wording so callers can
    translate it for the user.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def _user_to_dict(user: Any) -> dict[str, Any]:
    """Convert a gotrue User object into a plain dict."""
    if user is None:
        return {}
    if isinstance(user, dict):
        return user
    if hasattr(user, "model_dump"):
        return user.model_dump()
    return dict(user)


class SupabaseClient:
    """
    Typed wrapper for Supabase Auth admin operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        user = SupabaseClient.fetch_user("550e8400-...")
        SupabaseClient.delete_user("550e8400-...")
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key, which is required for auth.admin calls.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_user(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a user's auth record.

        Returns:
            User dict (id, email, created_at, app_metadata, ...) or None
        """
        client = cls.get_client()
        uid = normalize_uuid(user_id)

        try:
            response = client.auth.admin.get_user_by_id(uid)
        except Exception as e:
            logger.warning(f"Could not fetch user {uid}: {e}")
            return None

        user = getattr(response, "user", None)
        return _user_to_dict(user) or None

    @classmethod
    def update_password(cls, user_id: str | UUID, password: str) -> None:
        """
        Set a new password for a user.

        Raises:
            SupabaseClientError: With Supabase's message if rejected
        """
        client = cls.get_client()
        uid = normalize_uuid(user_id)

        try:
            client.auth.admin.update_user_by_id(uid, {"password": password})
        except Exception as e:
            message = getattr(e, "message", None) or str(e)
            logger.warning(f"Password update failed for {uid}: {message}")
            raise SupabaseClientError(
                message=message,
                code="PASSWORD_UPDATE_FAILED",
                details={"user_id": uid},
            )

        logger.info(f"Password updated for user {uid}")

    @classmethod
    def delete_user(cls, user_id: str | UUID) -> None:
        """
        Permanently delete a user.

        Raises:
            SupabaseClientError: If deletion fails
        """
        client = cls.get_client()
        uid = normalize_uuid(user_id)

        try:
            client.auth.admin.delete_user(uid)
        except Exception as e:
            message = getattr(e, "message", None) or str(e)
            logger.error(f"User deletion failed for {uid}: {message}")
            raise SupabaseClientError(
                message=message,
                code="USER_DELETE_FAILED",
                details={"user_id": uid},
            )

        logger.info(f"Deleted user {uid}")
