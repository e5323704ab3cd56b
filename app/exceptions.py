# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Error bodies keep the `error` key the web client reads, plus a
# machine-readable `code`. Messages are already localized by the caller.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class StylistException(Exception):
    """
    Base exception for the AJY Stylist API.

    All custom HTTP-facing exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "STYLIST_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        result.update(self.details)
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class MissingFieldsError(StylistException):
    """Raised when a required request field is absent or blank."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="MISSING_FIELDS",
            status_code=400,
        )


class InvalidEmailError(StylistException):
    """Raised when an email address fails validation."""

    def __init__(self, message: str = "Invalid email address"):
        super().__init__(
            message=message,
            code="INVALID_EMAIL",
            status_code=400,
        )


class InvalidPasswordError(StylistException):
    """Raised when a new password is rejected before reaching Supabase."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_PASSWORD",
            status_code=400,
        )


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ServiceNotConfiguredError(StylistException):
    """Raised when the provider key a handler needs is not set."""

    def __init__(self, message: str, service: str, status_code: int = 500):
        super().__init__(
            message=message,
            code="SERVICE_NOT_CONFIGURED",
            status_code=status_code,
            details={"service": service},
        )


# =============================================================================
# Upstream Exceptions
# =============================================================================

class UpstreamError(StylistException):
    """Raised when a third-party API rejects a request."""

    def __init__(
        self,
        message: str,
        code: str = "UPSTREAM_ERROR",
        status_code: int = 502,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            details=details,
        )


class AnalysisFailedError(StylistException):
    """
    Raised when a style analysis cannot produce a report.

    Always carries the outcome of the refund attempt so the client can tell
    the user whether they were charged.
    """

    def __init__(self, message: str, refunded: bool = False, code: str = "ANALYSIS_FAILED"):
        super().__init__(
            message=message,
            code=code,
            status_code=500,
            details={"refunded": refunded},
        )
        self.refunded = refunded


class NotFoundError(StylistException):
    """Raised when a customer or subscription does not exist."""

    def __init__(self, message: str, code: str = "NOT_FOUND"):
        super().__init__(
            message=message,
            code=code,
            status_code=404,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def stylist_exception_handler(
    request: Request,
    exc: StylistException
) -> JSONResponse:
    """
    Convert StylistException to JSON response.

    Returns structured error with:
    - error: Human-readable (localized) message
    - code: Machine-readable error code
    - any extra details (e.g. refunded)
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle malformed request bodies.

    Presence of required fields is checked by the handlers themselves so
    that the message can be localized; this only fires for bodies that are
    not JSON objects or carry wrongly typed values.
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
