# =============================================================================
# agents/stylist.py - Stylist Agent
# =============================================================================
# This module wraps the two OpenAI calls behind a style analysis:
# 1. A vision chat completion that writes the markdown style report
# 2. An image edit that renders the user in three styled looks
#
# Both calls are async so the analysis flow can run them concurrently.
#
# Usage:
#   from agents.stylist import StylistAgent
#   agent = StylistAgent(api_key=settings.OPENAI_API_KEY)
#   report = await agent.generate_report(system_prompt, user_message, photo)
#   image = await agent.try_generate_style_image(photo)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from agents.prompts.stylist_system import STYLE_IMAGE_CONFIG, build_style_prompt
from lib.images import InvalidImageError, decode_data_url, image_filename, to_data_url
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

# Image edit parameters the SDK signature does not expose
_EXTRA_IMAGE_FIELDS = ("moderation",)


# =============================================================================
# Exceptions
# =============================================================================

class StylistError(ApplicationError):
    """
    Error while generating a report or style image.

    `status_code` carries the upstream HTTP status when OpenAI answered.
    """

    def __init__(
        self,
        message: str,
        code: str = "STYLIST_ERROR",
        status_code: int | None = None,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)
        self.status_code = status_code


def _wrap_openai_error(e: Exception, what: str) -> StylistError:
    """Convert an OpenAI SDK exception into a StylistError."""
    if isinstance(e, openai.APIStatusError):
        body = e.response.text if e.response is not None else str(e)
        return StylistError(
            message=f"OpenAI {what} error: {e.status_code} - {body}",
            code="OPENAI_STATUS_ERROR",
            status_code=e.status_code,
            details={"body": body},
        )
    if isinstance(e, openai.APITimeoutError):
        return StylistError(
            message=f"OpenAI {what} request timed out",
            code="OPENAI_TIMEOUT",
        )
    if isinstance(e, openai.APIConnectionError):
        return StylistError(
            message=f"Could not reach OpenAI for {what}: {e}",
            code="OPENAI_CONNECTION_ERROR",
            suggestion="Check network connectivity to api.openai.com",
        )
    return StylistError(
        message=f"Unexpected OpenAI {what} error: {e}",
        code="OPENAI_ERROR",
    )


# =============================================================================
# Stylist Agent
# =============================================================================

class StylistAgent:
    """
    Generates style reports and style images with OpenAI.

    Attributes:
        client: AsyncOpenAI client
        text_model: Vision-capable chat model for the report
        image_config: Image edit parameters (model, size, quality, ...)
    """

    def __init__(
        self,
        api_key: str | None = None,
        text_model: str = "gpt-4o-mini",
        image_config: dict[str, Any] | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.api_key = api_key or ""
        self.client = client or AsyncOpenAI(api_key=self.api_key or "missing")
        self.text_model = text_model
        self.image_config = dict(image_config or STYLE_IMAGE_CONFIG)

    @property
    def configured(self) -> bool:
        """True when an API key is available."""
        return bool(self.api_key)

    # -------------------------------------------------------------------------
    # Style Report
    # -------------------------------------------------------------------------

    async def generate_report(
        self,
        system_prompt: str,
        user_message: str,
        photo: str,
    ) -> str:
        """
        Write the markdown style report for a photo.

        Args:
            system_prompt: Output of build_analysis_prompt()
            user_message: Output of build_user_message()
            photo: Photo as data URL (sent as an image_url part)

        Returns:
            Markdown report text

        Raises:
            StylistError: On upstream failure or an empty completion
        """
        logger.info(f"Requesting style report from {self.text_model}")

        try:
            completion = await self.client.chat.completions.create(
                model=self.text_model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": user_message},
                            {"type": "image_url", "image_url": {"url": photo}},
                        ],
                    },
                ],
            )
        except openai.OpenAIError as e:
            raise _wrap_openai_error(e, "text")

        report = None
        if completion.choices:
            report = completion.choices[0].message.content

        if not report:
            raise StylistError(
                message="OpenAI returned an empty report",
                code="EMPTY_REPORT",
            )

        logger.info(f"Style report generated ({len(report)} chars)")
        return report

    # -------------------------------------------------------------------------
    # Style Image
    # -------------------------------------------------------------------------

    async def generate_style_image(
        self,
        photo: str,
        prompt: str | None = None,
    ) -> str | None:
        """
        Render the three-look style image from a photo.

        Args:
            photo: Photo as data URL or raw base64
            prompt: Image prompt (default: build_style_prompt())

        Returns:
            "data:image/png;base64,..." or a hosted URL, None if OpenAI
            returned no image

        Raises:
            StylistError: On invalid photo data or upstream failure
        """
        try:
            image_bytes, mime = decode_data_url(photo)
        except InvalidImageError as e:
            raise StylistError(message=e.message, code=e.code, status_code=400)

        params = {k: v for k, v in self.image_config.items() if k not in _EXTRA_IMAGE_FIELDS}
        extra = {k: v for k, v in self.image_config.items() if k in _EXTRA_IMAGE_FIELDS}

        logger.info(f"Requesting style image from {params.get('model')}")

        try:
            result = await self.client.images.edit(
                image=(image_filename(mime), image_bytes, mime),
                prompt=prompt or build_style_prompt(),
                extra_body=extra or None,
                **params,
            )
        except openai.OpenAIError as e:
            raise _wrap_openai_error(e, "image")

        image = result.data[0] if result.data else None
        if image is None:
            return None
        if image.b64_json:
            return to_data_url(image.b64_json)
        return image.url or None

    async def try_generate_style_image(
        self,
        photo: str,
        prompt: str | None = None,
    ) -> str | None:
        """Like generate_style_image(), but returns None instead of raising."""
        try:
            return await self.generate_style_image(photo, prompt)
        except StylistError as e:
            logger.error(f"Style image generation failed: {e}")
            return None
        except Exception as e:
            logger.exception(f"Unexpected style image error: {e}")
            return None
