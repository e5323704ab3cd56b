# =============================================================================
# app/routers/subscription.py - Subscription Endpoints
# =============================================================================
# - GET  /subscription: does this email have an active subscription?
# - POST /cancel-subscription: cancel at the end of the current period
#
# The status check never errors once an email is known: the client uses it
# to decide whether to show the paywall, and "no" is the safe answer.
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.auth import AuthUser, get_current_user_optional
from app.dependencies import PolarDep
from app.exceptions import (
    MissingFieldsError,
    NotFoundError,
    ServiceNotConfiguredError,
    StylistException,
)
from core.models.email import SuccessResponse
from core.models.subscription import CancelSubscriptionRequest, SubscriptionStatus
from core.services.polar_service import PolarError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/subscription", response_model=SubscriptionStatus)
async def get_subscription(
    polar: PolarDep,
    email: Optional[str] = Query(default=None, description="Customer email"),
    user: Optional[AuthUser] = Depends(get_current_user_optional),
):
    """
    Check whether a customer has an active subscription.

    The email comes from the query string, or from the bearer token when
    the user is signed in.
    """
    email = email or (user.email if user else None)
    if not email:
        raise MissingFieldsError("Email required")

    if not polar.configured:
        logger.warning("POLAR_ACCESS_TOKEN not set, reporting no subscription")
        return SubscriptionStatus(has_active_subscription=False)

    active = await polar.has_active_subscription(email)
    return SubscriptionStatus(has_active_subscription=active)


@router.post("/cancel-subscription", response_model=SuccessResponse)
async def cancel_subscription(request: CancelSubscriptionRequest, polar: PolarDep):
    """
    Cancel the customer's subscription at the end of the billing period.

    Errors:
    - 400: no email
    - 404: no such customer, or no active subscription
    - 500: Polar lookup or cancellation failed
    - 503: Polar not configured
    """
    if not request.email:
        raise MissingFieldsError("Email required")

    if not polar.configured:
        raise ServiceNotConfiguredError("Service unavailable", service="polar", status_code=503)

    try:
        customer_id = await polar.find_customer_id(request.email)
        if not customer_id:
            raise NotFoundError("Customer not found", code="CUSTOMER_NOT_FOUND")

        subscriptions = await polar.get_active_subscriptions(customer_id)
        if not subscriptions:
            raise NotFoundError("No active subscription", code="SUBSCRIPTION_NOT_FOUND")

        cancelled = await polar.cancel_subscription_at_period_end(subscriptions[0]["id"])
    except PolarError as e:
        logger.error(f"Cancel subscription error: {e}")
        if e.code == "CUSTOMER_LOOKUP_FAILED":
            raise StylistException("Failed to find customer", code=e.code, status_code=500)
        if e.code == "CUSTOMER_STATE_FAILED":
            raise StylistException("Failed to get subscription", code=e.code, status_code=500)
        raise StylistException("Internal server error", code=e.code, status_code=500)

    if not cancelled:
        raise StylistException("Failed to cancel subscription", code="CANCEL_FAILED", status_code=500)

    return SuccessResponse()
