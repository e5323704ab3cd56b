# =============================================================================
# core/models/checkout.py - Checkout Schemas
# =============================================================================
# These models define the API contract for payment checkout:
# - CheckoutRequest: Client asks for an embeddable checkout session
# - CheckoutResponse: Polar checkout URL + identifiers
# - CheckoutSession: What the analysis flow reads back from a paid checkout
#
# Flow:
# 1. Client POSTs CheckoutRequest -> opens CheckoutResponse.url embedded
# 2. After payment, client POSTs /analyze with checkout_id = CheckoutResponse.id
# 3. The analysis flow fetches the CheckoutSession for email and refund amount
# =============================================================================

from pydantic import BaseModel, Field


class CheckoutRequest(BaseModel):
    """
    Schema for creating a checkout session.

    Example:
        {
            "embed_origin": "https://ajy.style",
            "locale": "en"
        }
    """

    # Origin of the page embedding the checkout iframe
    embed_origin: str | None = Field(
        default=None,
        description="Origin allowed to embed the checkout"
    )

    locale: str | None = Field(
        default=None,
        description="Client locale for error messages (en or ko)"
    )


class CheckoutResponse(BaseModel):
    """
    Schema for a newly created checkout session.

    Example:
        {
            "url": "https://sandbox.polar.sh/checkout/polar_c_...",
            "id": "9b2c...",
            "client_secret": "polar_c_..."
        }
    """

    url: str = Field(..., description="Hosted checkout URL")
    id: str = Field(..., description="Checkout ID (pass to /analyze)")
    client_secret: str | None = Field(default=None, description="Client secret for embedding")


class CheckoutSession(BaseModel):
    """Paid checkout details used for email delivery and refunds."""

    customer_email: str | None = None

    # Amount in cents, as charged
    total_amount: int = 0
