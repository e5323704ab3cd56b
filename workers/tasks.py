# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Defines background tasks.
#
# Tasks:
# - send_report_email: Deliver a finished style report by email
# =============================================================================

import logging
from typing import Any

from celery import shared_task

from app.config import settings
from core.services.email_service import EmailDeliveryError, EmailService

logger = logging.getLogger(__name__)

EMAIL_MAX_RETRIES = 3
EMAIL_RETRY_DELAY = 30  # seconds


def build_email_service() -> EmailService:
    """EmailService configured from settings."""
    return EmailService(
        api_key=settings.RESEND_API_KEY,
        sender=settings.EMAIL_FROM,
        api_url=settings.RESEND_API_URL,
    )


@shared_task(
    bind=True,
    name="workers.tasks.send_report_email",
    max_retries=EMAIL_MAX_RETRIES,
    default_retry_delay=EMAIL_RETRY_DELAY,
)
def send_report_email(
    self,
    to: str,
    report: str,
    locale: str,
    style_image: str | None = None,
) -> dict[str, Any]:
    """
    Send a style report email.

    Retried on delivery failures. Missing configuration is not retried.

    Args:
        to: Recipient address
        report: Markdown report
        locale: "en" or "ko"
        style_image: Optional image URL or data URL

    Returns:
        Dict with:
        - success: bool
        - message_id: Resend message ID (if sent)
        - error: Reason (if not sent)
    """
    service = build_email_service()
    if not service.configured:
        logger.warning("RESEND_API_KEY not set, report email skipped")
        return {"success": False, "error": "Email service not configured"}

    try:
        message_id = service.send_report_sync(to, report, locale, style_image)
    except EmailDeliveryError as e:
        logger.warning(f"Report email failed (attempt {self.request.retries + 1}): {e.message}")
        if self.request.retries >= self.max_retries:
            return {"success": False, "error": e.message}
        raise self.retry(exc=e)

    return {"success": True, "message_id": message_id}
