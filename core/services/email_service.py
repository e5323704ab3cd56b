# =============================================================================
# core/services/email_service.py - Report Emails via Resend
# =============================================================================
# Builds the branded HTML report email and sends it through the Resend API.
# =============================================================================

import html as html_lib
import logging
import re
from typing import Any

import httpx

from core.locale import Locale, resolve_locale
from lib.markdown import render_markdown_to_html
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DEFAULT_TIMEOUT = 15.0


class EmailDeliveryError(ApplicationError):
    """Raised when Resend does not accept an email."""

    def __init__(self, message: str, status_code: int | None = None, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code="EMAIL_DELIVERY_FAILED",
            suggestion="Check RESEND_API_KEY and the sender domain",
            details=details,
        )
        self.status_code = status_code


def is_valid_email(value: str | None) -> bool:
    """Loose address check: something@something.tld, no whitespace."""
    return bool(value) and EMAIL_PATTERN.match(value) is not None


# =============================================================================
# Templates
# =============================================================================

_COPY = {
    Locale.EN: {
        "subject": "AJY Stylist — Your Personal Style Report",
        "title": "AJY Stylist — Style Report",
        "section": "AI Analysis Report",
        "image": "AI Style Suggestion",
        "disclaimer": "This report is AI-generated fashion reference material. It does not replace professional stylist advice.",
        "footer": "AI Fashion Styling by AJY Stylist",
    },
    Locale.KO: {
        "subject": "AJY Stylist — 나만의 스타일 리포트가 도착했습니다",
        "title": "AJY Stylist — 스타일 리포트",
        "section": "AI 분석 리포트",
        "image": "AI 스타일 제안",
        "disclaimer": "본 보고서는 AI 소프트웨어가 자동 생성한 패션 참고 자료입니다. 전문 스타일리스트의 조언을 대체하지 않습니다.",
        "footer": "AI 패션 스타일링 by AJY Stylist",
    },
}

_IMAGE_BLOCK = """<div style="margin: 2em 0; text-align: center;">
         <p style="margin: 0 0 1em; font-size: 0.8rem; letter-spacing: 0.12em; text-transform: uppercase; color: #7a6f8a;">{label}</p>
         <img src="{src}" alt="{label}" style="width: 100%; max-width: 520px; border-radius: 12px; border: 1px solid rgba(201,185,154,0.2);" />
       </div>"""

_PAGE = """<!DOCTYPE html>
<html lang="{lang}">
<head><meta charset="UTF-8"/><meta name="viewport" content="width=device-width,initial-scale=1"/><title>{title}</title></head>
<body style="margin:0;padding:0;background:#0d0b18;font-family:'Georgia',serif;color:#c9b99a;">
  <table width="100%" cellpadding="0" cellspacing="0" style="background:#0d0b18;padding:32px 0;">
    <tr><td align="center">
      <table width="600" cellpadding="0" cellspacing="0" style="max-width:600px;width:100%;">
        <tr>
          <td style="background:linear-gradient(135deg,#1a1530 0%,#231d3a 100%);border-radius:16px 16px 0 0;padding:32px 40px;text-align:center;border-bottom:1px solid rgba(201,185,154,0.2);">
            <p style="margin:0;font-size:1.6rem;font-weight:700;color:#e8d5b7;letter-spacing:0.08em;">AJY <span style="color:#c9b99a;font-weight:400;font-size:1.1rem;">Stylist</span></p>
            <p style="margin:8px 0 0;font-size:0.85rem;color:#7a6f8a;letter-spacing:0.12em;text-transform:uppercase;">AI Fashion Styling</p>
          </td>
        </tr>
        <tr>
          <td style="background:#131022;padding:36px 40px;">
            <p style="margin:0 0 1em;font-size:0.8rem;letter-spacing:0.12em;text-transform:uppercase;color:#7a6f8a;">{section}</p>
            <div style="font-size:0.9em;line-height:1.8;color:#c9b99a;"><p style="margin:0 0 0.75em 0;">{report}</p></div>
            {image}
            <div style="margin-top:2em;padding:16px 20px;background:rgba(255,255,255,0.04);border-radius:8px;border-left:3px solid rgba(201,185,154,0.4);">
              <p style="margin:0;font-size:0.78rem;color:#7a6f8a;line-height:1.6;">{disclaimer}</p>
            </div>
          </td>
        </tr>
        <tr>
          <td style="background:#0d0b18;border-radius:0 0 16px 16px;padding:24px 40px;text-align:center;border-top:1px solid rgba(201,185,154,0.1);">
            <p style="margin:0;font-size:0.8rem;color:#7a6f8a;">{footer}</p>
            <p style="margin:8px 0 0;font-size:0.72rem;color:#4a4560;">© 2026 AJY Stylist. All rights reserved.</p>
          </td>
        </tr>
      </table>
    </td></tr>
  </table>
</body>
</html>"""


def build_subject(locale: Locale | str | None) -> str:
    """Localized email subject."""
    return _COPY[resolve_locale(locale)]["subject"]


def build_report_html(
    report: str,
    locale: Locale | str | None,
    style_image: str | None = None,
) -> str:
    """
    Render the report email.

    Args:
        report: Markdown report
        locale: Email language
        style_image: Optional image URL or data URL shown below the report

    Returns:
        Complete HTML document with inline styles
    """
    locale = resolve_locale(locale)
    copy = _COPY[locale]

    image_html = ""
    if style_image:
        image_html = _IMAGE_BLOCK.format(
            label=copy["image"],
            src=html_lib.escape(style_image, quote=True),
        )

    return _PAGE.format(
        lang=locale.value,
        title=copy["title"],
        section=copy["section"],
        report=render_markdown_to_html(report),
        image=image_html,
        disclaimer=copy["disclaimer"],
        footer=copy["footer"],
    )


# =============================================================================
# Email Service
# =============================================================================

class EmailService:
    """
    Sends report emails through Resend.

    Example:
        emails = EmailService(api_key="re_...")
        await emails.send_report("user@example.com", report, Locale.EN)
        emails.send_report_sync("user@example.com", report, Locale.EN)  # worker
    """

    def __init__(
        self,
        api_key: str | None,
        sender: str = "AJY Stylist <onboarding@resend.dev>",
        api_url: str = "https://api.resend.com",
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key or ""
        self.sender = sender
        self.api_url = api_url.rstrip("/")
        # Used by both send paths; httpx.MockTransport serves sync and async clients
        self._transport = transport

    @property
    def configured(self) -> bool:
        """True when a Resend API key is available."""
        return bool(self.api_key)

    async def send_report(
        self,
        to: str,
        report: str,
        locale: Locale | str | None,
        style_image: str | None = None,
    ) -> str | None:
        """
        Send a report email.

        Returns:
            Resend message ID (if returned)

        Raises:
            EmailDeliveryError: If Resend rejects the email or is unreachable
        """
        payload = self._build_payload(to, report, locale, style_image)

        try:
            async with httpx.AsyncClient(**self._client_options()) as client:
                response = await client.post("/emails", json=payload)
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Could not reach Resend: {e}")

        return self._handle_response(response)

    def send_report_sync(
        self,
        to: str,
        report: str,
        locale: Locale | str | None,
        style_image: str | None = None,
    ) -> str | None:
        """
        Blocking variant of send_report for Celery tasks.

        Safe to call whether or not an event loop is running in the thread,
        so it also works when tasks execute eagerly inside the API.
        """
        payload = self._build_payload(to, report, locale, style_image)

        try:
            with httpx.Client(**self._client_options()) as client:
                response = client.post("/emails", json=payload)
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Could not reach Resend: {e}")

        return self._handle_response(response)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _client_options(self) -> dict[str, Any]:
        return {
            "base_url": self.api_url,
            "headers": {"Authorization": f"Bearer {self.api_key}"},
            "timeout": DEFAULT_TIMEOUT,
            "transport": self._transport,
        }

    def _build_payload(
        self,
        to: str,
        report: str,
        locale: Locale | str | None,
        style_image: str | None,
    ) -> dict[str, Any]:
        return {
            "from": self.sender,
            "to": [to],
            "subject": build_subject(locale),
            "html": build_report_html(report, locale, style_image),
        }

    def _handle_response(self, response: httpx.Response) -> str | None:
        """Map the Resend reply to a message ID or EmailDeliveryError."""
        if response.is_error:
            logger.error(f"Resend API error: {response.text}")
            raise EmailDeliveryError(
                f"Resend rejected the email: {response.status_code}",
                status_code=response.status_code,
                details={"body": response.text},
            )

        logger.info("Report email sent")
        try:
            return response.json().get("id")
        except ValueError:
            return None
