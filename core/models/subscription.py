# =============================================================================
# core/models/subscription.py - Subscription Schemas
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class SubscriptionStatus(BaseModel):
    """
    Whether a customer has an active subscription.

    Example:
        {"hasActiveSubscription": true}
    """

    model_config = ConfigDict(populate_by_name=True)

    has_active_subscription: bool = Field(
        default=False,
        serialization_alias="hasActiveSubscription",
    )


class CancelSubscriptionRequest(BaseModel):
    """Schema for cancelling a subscription at the end of the period."""

    email: str | None = Field(default=None, description="Customer email")
