# =============================================================================
# core/locale.py - Locale Resolution and Localized Messages
# =============================================================================
# The product ships in Korean and English. Korean is the default: any locale
# value other than "en" resolves to Korean.
#
# Usage:
#   from core.locale import resolve_locale, error_messages
#   locale = resolve_locale(request.locale)
#   raise MissingFieldsError(error_messages(locale).missing_fields)
# =============================================================================

from dataclasses import dataclass
from enum import Enum


class Locale(str, Enum):
    """Supported UI/report languages."""
    EN = "en"
    KO = "ko"


def resolve_locale(raw: str | Locale | None) -> Locale:
    """Map a client-supplied locale to a supported one (default: ko)."""
    if raw is None:
        return Locale.KO
    value = raw.value if isinstance(raw, Locale) else str(raw)
    return Locale.EN if value == "en" else Locale.KO


@dataclass(frozen=True)
class ErrorMessages:
    """User-facing error strings for one locale."""

    missing_fields: str
    no_api_key: str
    analysis_failed: str
    report_failed: str
    server_error: str
    checkout_not_configured: str
    checkout_failed: str
    timeout: str
    # Auth
    invalid_credentials: str
    password_weak: str
    password_too_short: str
    password_mismatch: str
    email_in_use: str
    token_expired: str
    auth_generic: str
    delete_failed: str


_MESSAGES: dict[Locale, ErrorMessages] = {
    Locale.EN: ErrorMessages(
        missing_fields="Please fill in all fields.",
        no_api_key="API key is not configured.",
        analysis_failed="An error occurred during AI analysis. Please try again later.",
        report_failed="Failed to generate the report.",
        server_error="A server error occurred.",
        checkout_not_configured="Payment is not configured.",
        checkout_failed="Failed to create payment session.",
        timeout="The AI analysis took too long. Please try again later.",
        invalid_credentials="Invalid email or password.",
        password_weak="Password must include letters and numbers.",
        password_too_short="Password must be at least 8 characters.",
        password_mismatch="Passwords do not match.",
        email_in_use="This email is already registered.",
        token_expired="The link has expired. Please request a new one.",
        auth_generic="Authentication failed. Please try again.",
        delete_failed="Failed to delete the account. Please try again later.",
    ),
    Locale.KO: ErrorMessages(
        missing_fields="모든 필드를 입력해주세요.",
        no_api_key="API 키가 설정되지 않았습니다.",
        analysis_failed="AI 분석 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요.",
        report_failed="보고서 생성에 실패했습니다.",
        server_error="서버 오류가 발생했습니다.",
        checkout_not_configured="결제 설정이 완료되지 않았습니다.",
        checkout_failed="결제 세션 생성에 실패했습니다.",
        timeout="AI 분석 시간이 초과되었습니다. 잠시 후 다시 시도해주세요.",
        invalid_credentials="이메일 또는 비밀번호가 올바르지 않습니다.",
        password_weak="비밀번호는 영문과 숫자를 포함해야 합니다.",
        password_too_short="비밀번호는 8자 이상이어야 합니다.",
        password_mismatch="비밀번호가 일치하지 않습니다.",
        email_in_use="이미 가입된 이메일입니다.",
        token_expired="링크가 만료되었습니다. 다시 요청해주세요.",
        auth_generic="인증에 실패했습니다. 다시 시도해주세요.",
        delete_failed="계정 삭제에 실패했습니다. 잠시 후 다시 시도해주세요.",
    ),
}


def error_messages(locale: Locale | str | None) -> ErrorMessages:
    """Get the error message catalog for a locale."""
    return _MESSAGES[resolve_locale(locale)]
