# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends(), and replaced with
# fakes in tests through app.dependency_overrides.
# =============================================================================

import logging
from typing import Annotated

from fastapi import Depends

from agents.stylist import StylistAgent
from app.config import settings
from core.services.analysis_service import AnalysisService
from core.services.email_service import EmailService
from core.services.polar_service import PolarService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


def get_supabase_client() -> type[SupabaseClient]:
    """
    Get Supabase client instance.

    Returns the singleton client wrapper.
    """
    return SupabaseClient


def get_stylist() -> StylistAgent:
    """OpenAI-backed stylist agent."""
    return StylistAgent(
        api_key=settings.OPENAI_API_KEY,
        text_model=settings.OPENAI_TEXT_MODEL,
    )


def get_polar() -> PolarService:
    """Polar payments client."""
    return PolarService(
        access_token=settings.POLAR_ACCESS_TOKEN,
        api_url=settings.POLAR_API_URL,
        product_id=settings.POLAR_PRODUCT_ID,
    )


def get_email_service() -> EmailService:
    """Resend email client."""
    return EmailService(
        api_key=settings.RESEND_API_KEY,
        sender=settings.EMAIL_FROM,
        api_url=settings.RESEND_API_URL,
    )


def queue_report_email(to: str, report: str, locale: str, style_image: str | None) -> None:
    """Hand a report email to the Celery worker."""
    from workers.tasks import send_report_email

    result = send_report_email.delay(to, report, locale, style_image)
    logger.info(f"Queued report email task {result.id}")


def get_analysis_service(
    stylist: StylistAgent = Depends(get_stylist),
    polar: PolarService = Depends(get_polar),
    emails: EmailService = Depends(get_email_service),
) -> AnalysisService:
    """
    Analysis orchestrator wired to the configured providers.

    Report emails are only queued when Resend is configured.
    """
    return AnalysisService(
        stylist=stylist,
        polar=polar,
        queue_email=queue_report_email if emails.configured else None,
        timeout=settings.ANALYZE_TIMEOUT_SECONDS,
        refund_attempts=settings.REFUND_MAX_ATTEMPTS,
        refund_backoff=settings.REFUND_BACKOFF_SECONDS,
    )


# Type aliases for dependency injection
SupabaseDep = Annotated[type[SupabaseClient], Depends(get_supabase_client)]
StylistDep = Annotated[StylistAgent, Depends(get_stylist)]
PolarDep = Annotated[PolarService, Depends(get_polar)]
EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]
AnalysisServiceDep = Annotated[AnalysisService, Depends(get_analysis_service)]
