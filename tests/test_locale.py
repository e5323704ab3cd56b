# =============================================================================
# tests/test_locale.py - Locale and Localized Message Tests
# =============================================================================
# This module contains tests for:
# - Locale resolution (Korean default)
# - Error message catalogs
# - Supabase auth error translation
# =============================================================================

import pytest

from app.auth.errors import translate_auth_error
from core.locale import Locale, error_messages, resolve_locale


# =============================================================================
# Locale Resolution Tests
# =============================================================================

class TestResolveLocale:
    """Test mapping client locale strings to supported locales."""

    def test_en_resolves_to_english(self):
        assert resolve_locale("en") == Locale.EN

    @pytest.mark.parametrize("raw", ["ko", "fr", "EN", "en-US", "", None])
    def test_anything_else_resolves_to_korean(self, raw):
        """Only the exact value "en" selects English."""
        assert resolve_locale(raw) == Locale.KO

    def test_accepts_locale_enum(self):
        assert resolve_locale(Locale.EN) == Locale.EN
        assert resolve_locale(Locale.KO) == Locale.KO


# =============================================================================
# Message Catalog Tests
# =============================================================================

class TestErrorMessages:
    """Test the localized error catalogs."""

    def test_english_messages(self):
        messages = error_messages("en")

        assert messages.missing_fields == "Please fill in all fields."
        assert messages.password_too_short == "Password must be at least 8 characters."

    def test_korean_is_default(self):
        assert error_messages(None) == error_messages("ko")
        assert error_messages("de").missing_fields == "모든 필드를 입력해주세요."

    def test_catalogs_are_complete(self):
        """Every key has a non-empty message in both languages."""
        for locale in Locale:
            messages = error_messages(locale)
            for field, value in vars(messages).items():
                assert value, f"{locale.value}.{field} is empty"


# =============================================================================
# Auth Error Translation Tests
# =============================================================================

class TestTranslateAuthError:
    """Test Supabase error message translation."""

    def test_invalid_credentials(self):
        result = translate_auth_error("Invalid login credentials", "en")
        assert result == "Invalid email or password."

    def test_weak_password(self):
        result = translate_auth_error(
            "Password should contain at least one character of each: abc, 123",
            "ko",
        )
        assert result == error_messages("ko").password_weak

    def test_email_in_use(self):
        result = translate_auth_error("User already registered", "en")
        assert result == "This email is already registered."

    def test_expired_token(self):
        result = translate_auth_error("Token has expired or is invalid", "en")
        assert result == error_messages("en").token_expired

    def test_match_is_case_insensitive(self):
        result = translate_auth_error("INVALID LOGIN CREDENTIALS", "en")
        assert result == error_messages("en").invalid_credentials

    def test_unknown_message_falls_back_to_generic(self):
        assert translate_auth_error("Something odd happened", "en") == "Authentication failed. Please try again."
        assert translate_auth_error(None, "ko") == error_messages("ko").auth_generic
