# =============================================================================
# core/models/email.py - Report Email Schemas
# =============================================================================

from pydantic import AliasChoices, BaseModel, Field


class SendEmailRequest(BaseModel):
    """
    Schema for emailing a report the client already has.

    Older clients send the image as `hairstyleImage`; both keys are accepted.

    Example:
        {
            "email": "user@example.com",
            "report": "## Body Type Analysis\\n...",
            "styleImage": "data:image/png;base64,...",
            "locale": "en"
        }
    """

    email: str | None = Field(default=None, description="Recipient address")
    report: str | None = Field(default=None, description="Markdown report")

    style_image: str | None = Field(
        default=None,
        validation_alias=AliasChoices("styleImage", "hairstyleImage", "style_image"),
        description="Optional image to embed"
    )

    locale: str | None = Field(default=None, description="Email language (en or ko)")


class SuccessResponse(BaseModel):
    """Generic success acknowledgement."""

    success: bool = True
