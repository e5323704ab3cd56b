# =============================================================================
# app/routers/email.py - Report Email Endpoint
# =============================================================================
# Emails a report the client already has (e.g. "send to another address"
# from the result page). Sent inline, unlike the post-analysis email which
# goes through the Celery queue.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import EmailServiceDep
from app.exceptions import (
    InvalidEmailError,
    MissingFieldsError,
    ServiceNotConfiguredError,
    UpstreamError,
)
from core.models.email import SendEmailRequest, SuccessResponse
from core.services.email_service import EmailDeliveryError, is_valid_email

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/send-email", response_model=SuccessResponse)
async def send_email(request: SendEmailRequest, emails: EmailServiceDep):
    """
    Send a style report by email.

    Errors:
    - 400: email or report missing, or the address is malformed
    - 500: Resend not configured
    - 502: Resend rejected the email
    """
    if not request.email or not request.report:
        raise MissingFieldsError("Missing required fields")

    if not is_valid_email(request.email):
        raise InvalidEmailError()

    if not emails.configured:
        raise ServiceNotConfiguredError("Email service not configured", service="resend")

    try:
        await emails.send_report(
            request.email,
            request.report,
            request.locale,
            style_image=request.style_image,
        )
    except EmailDeliveryError as e:
        logger.error(f"send-email error: {e}")
        raise UpstreamError("Failed to send email", code="EMAIL_FAILED")

    return SuccessResponse()
