# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - checkout.py: Checkout session request/response
# - analysis.py: Style analysis and image generation request/response
# - email.py: Report email request
# - subscription.py: Subscription status and cancellation
#
# These models define the "contract" between API and clients.
# =============================================================================

from .checkout import (
    CheckoutRequest,
    CheckoutResponse,
    CheckoutSession,
)

from .analysis import (
    AnalyzeRequest,
    AnalyzeResponse,
    GenerateImageRequest,
    GenerateImageResponse,
)

from .email import (
    SendEmailRequest,
    SuccessResponse,
)

from .subscription import (
    CancelSubscriptionRequest,
    SubscriptionStatus,
)

__all__ = [
    # Checkout
    "CheckoutRequest",
    "CheckoutResponse",
    "CheckoutSession",
    # Analysis
    "AnalyzeRequest",
    "AnalyzeResponse",
    "GenerateImageRequest",
    "GenerateImageResponse",
    # Email
    "SendEmailRequest",
    "SuccessResponse",
    # Subscription
    "CancelSubscriptionRequest",
    "SubscriptionStatus",
]
