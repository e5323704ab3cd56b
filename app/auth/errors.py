# =============================================================================
# app/auth/errors.py - Supabase Auth Error Translation
# =============================================================================
# Supabase Auth reports errors in English. These are matched by substring
# and replaced with the localized message the user should see.
# =============================================================================

from core.locale import Locale, error_messages

_INVALID_CREDENTIALS = ("invalid login credentials", "invalid_credentials")
_PASSWORD_WEAK = ("password should contain",)
_EMAIL_IN_USE = (
    "user already registered",
    "already been registered",
    "email address already in use",
    "already registered",
)
_TOKEN_EXPIRED = ("token has expired", "token is invalid", "otp expired")


def translate_auth_error(message: str | None, locale: Locale | str | None) -> str:
    """
    Map a Supabase Auth error message to a localized user message.

    Example:
        >>> translate_auth_error("Invalid login credentials", "en")
        'Invalid email or password.'
    """
    messages = error_messages(locale)
    msg = (message or "").lower()

    if any(key in msg for key in _INVALID_CREDENTIALS):
        return messages.invalid_credentials
    if any(key in msg for key in _PASSWORD_WEAK):
        return messages.password_weak
    if any(key in msg for key in _EMAIL_IN_USE):
        return messages.email_in_use
    if any(key in msg for key in _TOKEN_EXPIRED):
        return messages.token_expired

    return messages.auth_generic
