# =============================================================================
# core/services/analysis_service.py - Style Analysis Orchestration
# =============================================================================
# Runs one paid (or free) style analysis:
#
#   validate -> read checkout -> [report || style image] -> email / refund
#
# The report and the style image are requested concurrently under a single
# wall-clock limit. A failed style image never fails the analysis; a failed
# report does, and for paid analyses triggers a best-effort refund whose
# outcome is returned to the client.
# =============================================================================

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable

from agents.prompts.stylist_system import (
    build_analysis_prompt,
    build_style_prompt,
    build_user_message,
)
from agents.stylist import StylistAgent, StylistError
from app.exceptions import AnalysisFailedError, MissingFieldsError, ServiceNotConfiguredError
from core.locale import Locale, error_messages, resolve_locale
from core.models.analysis import AnalyzeRequest, AnalyzeResponse
from core.services.polar_service import PolarService

logger = logging.getLogger(__name__)

# Queues a report email: (to, report, locale, style_image) -> None
EmailQueue = Callable[[str, str, str, str | None], None]


@dataclass
class PaymentContext:
    """What the analysis knows about how it was paid for."""

    checkout_id: str | None = None
    customer_email: str | None = None
    amount: int = 0

    @property
    def paid(self) -> bool:
        return bool(self.checkout_id)


class AnalysisService:
    """
    Orchestrates a style analysis across OpenAI, Polar and the email queue.

    Example:
        service = AnalysisService(stylist, polar, queue_email=enqueue)
        response = await service.analyze(request)
    """

    def __init__(
        self,
        stylist: StylistAgent,
        polar: PolarService,
        queue_email: EmailQueue | None = None,
        timeout: float = 28.0,
        refund_attempts: int = 4,
        refund_backoff: float = 3.0,
    ):
        self.stylist = stylist
        self.polar = polar
        self.queue_email = queue_email
        self.timeout = timeout
        self.refund_attempts = refund_attempts
        self.refund_backoff = refund_backoff

    # -------------------------------------------------------------------------
    # Main Entry Point
    # -------------------------------------------------------------------------

    async def analyze(self, request: AnalyzeRequest) -> AnalyzeResponse:
        """
        Run a style analysis.

        Raises:
            MissingFieldsError: photo/height/weight/gender missing (400)
            ServiceNotConfiguredError: no OpenAI key (500)
            AnalysisFailedError: report could not be produced (500, with refunded flag)
        """
        locale = resolve_locale(request.locale)
        messages = error_messages(locale)

        missing = request.missing_fields()
        if missing:
            logger.info(f"Analyze rejected, missing: {missing}")
            raise MissingFieldsError(messages.missing_fields)

        if not self.stylist.configured:
            raise ServiceNotConfiguredError(messages.no_api_key, service="openai")

        payment = await self._resolve_payment(request)

        logger.info(
            f"Starting analysis (locale={locale.value}, paid={payment.paid}, "
            f"email={'yes' if payment.customer_email else 'no'})"
        )

        try:
            report, style_image = await asyncio.wait_for(
                self._generate(request, locale),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Analysis timed out after {self.timeout}s")
            await self._fail(payment, messages.timeout, "Analysis timed out", code="ANALYSIS_TIMEOUT")
        except StylistError as e:
            logger.error(f"Analysis failed: {e}")
            if e.code == "EMPTY_REPORT":
                await self._fail(payment, messages.report_failed, e.message, code="REPORT_FAILED")
            else:
                await self._fail(payment, messages.analysis_failed, e.message)
        except Exception as e:
            logger.exception(f"Unexpected analysis error: {e}")
            await self._fail(payment, messages.analysis_failed, str(e))

        email_queued = self._queue_report_email(payment, report, locale, style_image)

        return AnalyzeResponse(
            report=report,
            style_image=style_image,
            email_queued=email_queued,
        )

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    async def _resolve_payment(self, request: AnalyzeRequest) -> PaymentContext:
        """Read the paid checkout, falling back to the client-supplied email."""
        if request.checkout_id and self.polar.configured:
            payment = PaymentContext(checkout_id=request.checkout_id)
            session = await self.polar.get_checkout(request.checkout_id)
            if session:
                payment.customer_email = session.customer_email
                payment.amount = session.total_amount
            return payment

        return PaymentContext(customer_email=request.user_email or None)

    async def _generate(self, request: AnalyzeRequest, locale: Locale) -> tuple[str, str | None]:
        """
        Request the report and the style image concurrently.

        The image edit is billed per call, so it is cancelled as soon as the
        report fails or the analysis times out.
        """
        system_prompt = build_analysis_prompt(locale, request.gender, request.height, request.weight)
        user_message = build_user_message(locale, request.gender, request.height, request.weight)

        image_task = asyncio.create_task(
            self.stylist.try_generate_style_image(request.photo, build_style_prompt())
        )
        try:
            report = await self.stylist.generate_report(system_prompt, user_message, request.photo)
            style_image = await image_task
        except BaseException:
            image_task.cancel()
            raise
        return report, style_image

    async def _fail(self, payment: PaymentContext, message: str, reason: str, code: str = "ANALYSIS_FAILED"):
        """Refund a paid analysis (best effort) and raise the client error."""
        refunded = False
        if payment.paid:
            refunded = await self.polar.refund_checkout(
                payment.checkout_id,
                payment.amount,
                comment=f"AI analysis failed: {reason}"[:500],
                max_attempts=self.refund_attempts,
                backoff=self.refund_backoff,
            )
            logger.info(f"Refund for checkout {payment.checkout_id}: {'issued' if refunded else 'not issued'}")

        raise AnalysisFailedError(message, refunded=refunded, code=code)

    def _queue_report_email(
        self,
        payment: PaymentContext,
        report: str,
        locale: Locale,
        style_image: str | None,
    ) -> bool:
        """Hand the report to the email queue. Never fails the analysis."""
        if not payment.customer_email or self.queue_email is None:
            return False

        try:
            self.queue_email(payment.customer_email, report, locale.value, style_image)
        except Exception as e:
            logger.error(f"Email send failed: {e}")
            return False

        return True
