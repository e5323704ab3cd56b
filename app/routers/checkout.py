# =============================================================================
# app/routers/checkout.py - Checkout Endpoint
# =============================================================================
# Creates an embeddable Polar checkout for one style report.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import PolarDep
from app.exceptions import ServiceNotConfiguredError, UpstreamError
from core.locale import error_messages
from core.models.checkout import CheckoutRequest, CheckoutResponse
from core.services.polar_service import PolarError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/checkout", response_model=CheckoutResponse)
async def create_checkout(polar: PolarDep, request: CheckoutRequest | None = None):
    """
    Create a checkout session.

    The returned `id` is passed to POST /analyze once payment completes so a
    failed analysis can be refunded.
    """
    request = request or CheckoutRequest()
    messages = error_messages(request.locale)

    if not polar.configured:
        raise ServiceNotConfiguredError(messages.checkout_not_configured, service="polar")

    try:
        return await polar.create_checkout(embed_origin=request.embed_origin)
    except PolarError as e:
        logger.error(f"Checkout error: {e}")
        raise UpstreamError(messages.checkout_failed, code="CHECKOUT_FAILED")
