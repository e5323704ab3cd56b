# =============================================================================
# core/services/polar_service.py - Polar Payments API
# =============================================================================
# Handles checkouts, order lookup, refunds and subscription state with the
# Polar REST API.
#
# Lookups used on the happy path of another flow (checkout details during
# analysis, subscription status) degrade to None/False instead of raising.
# Operations the caller needs to report on (create checkout, customer
# lookup for cancellation) raise PolarError.
# =============================================================================

import asyncio
import logging
from typing import Any

import httpx

from core.models.checkout import CheckoutResponse, CheckoutSession
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0


class PolarError(ApplicationError):
    """
    Error returned by (or while reaching) the Polar API.

    `status_code` is the upstream status, None for network errors.
    """

    def __init__(
        self,
        message: str,
        code: str = "POLAR_ERROR",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=code,
            suggestion="Check POLAR_ACCESS_TOKEN and POLAR_API_URL",
            details=details,
        )
        self.status_code = status_code


class PolarService:
    """
    Async client for the Polar API.

    Example:
        polar = PolarService(access_token="polar_oat_...")
        checkout = await polar.create_checkout(embed_origin="https://ajy.style")
        session = await polar.get_checkout(checkout.id)
    """

    def __init__(
        self,
        access_token: str | None,
        api_url: str = "https://sandbox-api.polar.sh",
        product_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep=asyncio.sleep,
    ):
        self.access_token = access_token or ""
        self.api_url = api_url.rstrip("/")
        self.product_id = product_id
        self._transport = transport
        self._sleep = sleep

    @property
    def configured(self) -> bool:
        """True when an access token is available."""
        return bool(self.access_token)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.api_url,
            headers={"Authorization": f"Bearer {self.access_token}"},
            timeout=DEFAULT_TIMEOUT,
            transport=self._transport,
        )

    # -------------------------------------------------------------------------
    # Checkouts
    # -------------------------------------------------------------------------

    async def create_checkout(self, embed_origin: str | None = None) -> CheckoutResponse:
        """
        Create a checkout session for the style report product.

        Args:
            embed_origin: Origin of the page embedding the checkout

        Returns:
            CheckoutResponse with url, id and client_secret

        Raises:
            PolarError: If Polar rejects the request or is unreachable
        """
        body: dict[str, Any] = {"products": [self.product_id]}
        if embed_origin:
            body["embed_origin"] = embed_origin

        try:
            async with self._client() as client:
                response = await client.post("/v1/checkouts/", json=body)
        except httpx.HTTPError as e:
            raise PolarError(f"Could not reach Polar: {e}", code="POLAR_UNREACHABLE")

        if response.is_error:
            logger.error(f"Polar API error: {response.text}")
            raise PolarError(
                f"Checkout creation failed: {response.status_code}",
                code="CHECKOUT_FAILED",
                status_code=response.status_code,
                details={"body": response.text},
            )

        data = response.json()
        logger.info(f"Created checkout {data.get('id')}")
        return CheckoutResponse(
            url=data["url"],
            id=data["id"],
            client_secret=data.get("client_secret"),
        )

    async def get_checkout(self, checkout_id: str) -> CheckoutSession | None:
        """
        Fetch the customer email and amount of a checkout.

        Returns None if the checkout cannot be read.
        """
        try:
            async with self._client() as client:
                response = await client.get(f"/v1/checkouts/{checkout_id}")
            if response.is_error:
                logger.warning(f"Checkout lookup failed for {checkout_id}: {response.status_code}")
                return None
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Checkout lookup failed for {checkout_id}: {e}")
            return None

        return CheckoutSession(
            customer_email=data.get("customer_email"),
            total_amount=data.get("total_amount") or 0,
        )

    # -------------------------------------------------------------------------
    # Orders & Refunds
    # -------------------------------------------------------------------------

    async def find_order_id(
        self,
        checkout_id: str,
        max_attempts: int = 4,
        backoff: float = 3.0,
    ) -> str | None:
        """
        Find the order created by a checkout.

        Orders appear shortly after payment, so the lookup is retried:
        attempt n (n > 0) waits backoff * n seconds first.

        Returns:
            Order ID, or None if no order appeared within max_attempts
        """
        for attempt in range(max_attempts):
            if attempt > 0:
                await self._sleep(backoff * attempt)
            try:
                async with self._client() as client:
                    response = await client.get(
                        "/v1/orders/",
                        params={"checkout_id": checkout_id, "limit": 1},
                    )
                if response.is_error:
                    logger.debug(f"Order lookup attempt {attempt + 1} got {response.status_code}")
                    continue
                items = response.json().get("items") or []
            except (httpx.HTTPError, ValueError) as e:
                logger.debug(f"Order lookup attempt {attempt + 1} failed: {e}")
                continue

            if items:
                return items[0]["id"]

        logger.warning(f"No order found for checkout {checkout_id} after {max_attempts} attempts")
        return None

    async def issue_refund(self, order_id: str, amount: int, comment: str) -> bool:
        """Refund an order. Returns True if Polar accepted the refund."""
        body = {
            "order_id": order_id,
            "reason": "service_disruption",
            "amount": amount,
            "comment": comment,
            "revoke_benefits": False,
        }
        try:
            async with self._client() as client:
                response = await client.post("/v1/refunds/", json=body)
        except httpx.HTTPError as e:
            logger.error(f"Refund request for order {order_id} failed: {e}")
            return False

        if response.is_error:
            logger.error(f"Refund rejected for order {order_id}: {response.status_code} {response.text}")
            return False

        logger.info(f"Refunded order {order_id} ({amount})")
        return True

    async def refund_checkout(
        self,
        checkout_id: str,
        amount: int,
        comment: str,
        max_attempts: int = 4,
        backoff: float = 3.0,
    ) -> bool:
        """
        Refund the order behind a checkout.

        Returns:
            True if a refund was issued, False if the order never appeared
            or the refund was rejected
        """
        order_id = await self.find_order_id(checkout_id, max_attempts=max_attempts, backoff=backoff)
        if not order_id:
            return False
        return await self.issue_refund(order_id, amount, comment)

    # -------------------------------------------------------------------------
    # Customers & Subscriptions
    # -------------------------------------------------------------------------

    async def find_customer_id(self, email: str) -> str | None:
        """
        Look up a customer by email.

        Returns:
            Customer ID, or None if no customer has this email

        Raises:
            PolarError: If the lookup itself fails
        """
        try:
            async with self._client() as client:
                response = await client.get(
                    "/v1/customers/",
                    params={"email": email, "limit": 1},
                )
        except httpx.HTTPError as e:
            raise PolarError(f"Could not reach Polar: {e}", code="POLAR_UNREACHABLE")

        if response.is_error:
            raise PolarError(
                "Failed to find customer",
                code="CUSTOMER_LOOKUP_FAILED",
                status_code=response.status_code,
            )

        items = response.json().get("items") or []
        return items[0]["id"] if items else None

    async def get_active_subscriptions(self, customer_id: str) -> list[dict[str, Any]]:
        """
        Active subscriptions from the customer state.

        Raises:
            PolarError: If the state cannot be read
        """
        try:
            async with self._client() as client:
                response = await client.get(f"/v1/customers/{customer_id}/state")
        except httpx.HTTPError as e:
            raise PolarError(f"Could not reach Polar: {e}", code="POLAR_UNREACHABLE")

        if response.is_error:
            raise PolarError(
                "Failed to get subscription",
                code="CUSTOMER_STATE_FAILED",
                status_code=response.status_code,
            )

        return response.json().get("active_subscriptions") or []

    async def has_active_subscription(self, email: str) -> bool:
        """True if the customer with this email has any active subscription."""
        try:
            customer_id = await self.find_customer_id(email)
            if not customer_id:
                return False
            return len(await self.get_active_subscriptions(customer_id)) > 0
        except (PolarError, ValueError) as e:
            logger.warning(f"Subscription check failed: {e}")
            return False

    async def cancel_subscription_at_period_end(self, subscription_id: str) -> bool:
        """
        Schedule a subscription to end with the current period.

        Raises:
            PolarError: If Polar is unreachable
        """
        try:
            async with self._client() as client:
                response = await client.patch(
                    f"/v1/subscriptions/{subscription_id}",
                    json={"cancel_at_period_end": True},
                )
        except httpx.HTTPError as e:
            raise PolarError(f"Could not reach Polar: {e}", code="POLAR_UNREACHABLE")

        if response.is_error:
            logger.error(f"Cancel failed for subscription {subscription_id}: {response.status_code}")
            return False

        logger.info(f"Subscription {subscription_id} set to cancel at period end")
        return True
