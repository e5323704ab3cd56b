# =============================================================================
# core/models/analysis.py - Style Analysis Schemas
# =============================================================================
# These models define the API contract for the style analysis:
# - AnalyzeRequest: Photo + body metrics (+ optional paid checkout)
# - AnalyzeResponse: Markdown style report + optional style image
# - GenerateImageRequest / GenerateImageResponse: standalone style image
#
# JSON keys use the web client's camelCase where it already exists
# (styleImage), snake_case elsewhere.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lib.utils import is_blank


def _coerce_metric(value: Any) -> Any:
    """Accept numeric height/weight and keep them as display strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return value


class AnalyzeRequest(BaseModel):
    """
    Schema for requesting a style analysis.

    Required fields are nullable so missing or null values produce a
    localized 400 instead of a framework validation error.

    Example:
        {
            "photo": "data:image/jpeg;base64,/9j/4AAQ...",
            "height": "172",
            "weight": "63",
            "gender": "female",
            "locale": "ko",
            "checkout_id": "9b2c..."
        }
    """

    photo: str | None = Field(default=None, description="Photo as data URL or base64")
    height: str | None = Field(default=None, description="Height in cm")
    weight: str | None = Field(default=None, description="Weight in kg")
    gender: str | None = Field(default=None, description="male or female")

    locale: str | None = Field(default=None, description="Report language (en or ko)")

    # Present when the analysis was paid through Polar checkout
    checkout_id: str | None = Field(default=None, description="Polar checkout ID")

    # Fallback recipient when there is no checkout
    user_email: str | None = Field(default=None, description="Email for the report")

    @field_validator("height", "weight", mode="before")
    @classmethod
    def coerce_metric(cls, value: Any) -> Any:
        return _coerce_metric(value)

    def missing_fields(self) -> list[str]:
        """Names of required fields that are absent or blank."""
        return [
            name for name in ("photo", "height", "weight", "gender")
            if is_blank(getattr(self, name))
        ]


class AnalyzeResponse(BaseModel):
    """
    Schema for a completed style analysis.

    Example:
        {
            "report": "## Body Type Analysis\\n...",
            "styleImage": "data:image/png;base64,iVBOR...",
            "emailQueued": true
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    report: str = Field(..., description="Markdown style report")

    style_image: str | None = Field(
        default=None,
        serialization_alias="styleImage",
        description="Generated style image (data URL or hosted URL)"
    )

    email_queued: bool = Field(
        default=False,
        serialization_alias="emailQueued",
        description="Whether the report email was queued for delivery"
    )


class GenerateImageRequest(BaseModel):
    """Schema for generating a standalone style image."""

    photo: str | None = Field(default=None, description="Photo as data URL or base64")


class GenerateImageResponse(BaseModel):
    """Schema for a generated style image."""

    image: str | None = Field(default=None, description="Data URL or hosted URL")
