# =============================================================================
# tests/test_analysis_service.py - Analysis Orchestration Tests
# =============================================================================
# This module contains tests for:
# - Request validation (localized missing-field errors)
# - Concurrent report + style image generation
# - Refund-on-failure for paid analyses
# - Report email queueing
#
# The stylist and Polar client are replaced with mocks.
# =============================================================================

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from agents.stylist import StylistError
from app.exceptions import AnalysisFailedError, MissingFieldsError, ServiceNotConfiguredError
from core.locale import error_messages
from core.models.analysis import AnalyzeRequest
from core.models.checkout import CheckoutSession
from core.services.analysis_service import AnalysisService


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def stylist(sample_report):
    agent = MagicMock()
    agent.configured = True
    agent.generate_report = AsyncMock(return_value=sample_report)
    agent.try_generate_style_image = AsyncMock(return_value="data:image/png;base64,aW1n")
    return agent


@pytest.fixture
def polar():
    client = MagicMock()
    client.configured = True
    client.get_checkout = AsyncMock(
        return_value=CheckoutSession(customer_email="buyer@example.com", total_amount=990)
    )
    client.refund_checkout = AsyncMock(return_value=True)
    return client


@pytest.fixture
def queue_email():
    return MagicMock()


@pytest.fixture
def service(stylist, polar, queue_email):
    return AnalysisService(stylist, polar, queue_email=queue_email, timeout=5.0)


def _request(analyze_payload, **overrides) -> AnalyzeRequest:
    return AnalyzeRequest(**{**analyze_payload, **overrides})


# =============================================================================
# Validation Tests
# =============================================================================

class TestValidation:
    """Test checks made before any upstream call."""

    @pytest.mark.parametrize("field", ["photo", "height", "weight", "gender"])
    def test_missing_field(self, service, stylist, analyze_payload, field):
        request = _request(analyze_payload, **{field: ""})

        with pytest.raises(MissingFieldsError) as exc_info:
            asyncio.run(service.analyze(request))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Please fill in all fields."
        stylist.generate_report.assert_not_called()

    def test_missing_field_message_is_localized(self, service, analyze_payload):
        request = _request(analyze_payload, height="", locale="ko")

        with pytest.raises(MissingFieldsError) as exc_info:
            asyncio.run(service.analyze(request))

        assert exc_info.value.message == error_messages("ko").missing_fields

    def test_numeric_metrics_accepted(self, service, analyze_payload):
        request = AnalyzeRequest(**{**analyze_payload, "height": 172, "weight": 63.0})

        assert request.height == "172"
        assert request.weight == "63"
        assert asyncio.run(service.analyze(request)).report

    def test_openai_not_configured(self, service, stylist, analyze_payload):
        stylist.configured = False

        with pytest.raises(ServiceNotConfiguredError) as exc_info:
            asyncio.run(service.analyze(_request(analyze_payload)))

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "API key is not configured."


# =============================================================================
# Success Path Tests
# =============================================================================

class TestSuccess:
    """Test a successful analysis."""

    def test_returns_report_and_image(self, service, sample_report, analyze_payload):
        response = asyncio.run(service.analyze(_request(analyze_payload, checkout_id="chk_1")))

        assert response.report == sample_report
        assert response.style_image == "data:image/png;base64,aW1n"
        assert response.model_dump(by_alias=True) == {
            "report": sample_report,
            "styleImage": "data:image/png;base64,aW1n",
            "emailQueued": True,
        }

    def test_prompts_use_locale_and_metrics(self, service, stylist, analyze_payload):
        asyncio.run(service.analyze(_request(analyze_payload, gender="male")))

        system_prompt, user_message, photo = stylist.generate_report.call_args.args
        assert "- Gender: Male" in system_prompt
        assert user_message == "Gender Male, Height 172cm, Weight 63kg"
        assert photo == analyze_payload["photo"]

    def test_missing_style_image_still_succeeds(self, service, stylist, analyze_payload):
        stylist.try_generate_style_image = AsyncMock(return_value=None)

        response = asyncio.run(service.analyze(_request(analyze_payload)))

        assert response.style_image is None
        assert response.report

    def test_report_and_image_run_concurrently(self, stylist, polar, analyze_payload, sample_report):
        """Both calls are in flight at the same time."""
        in_flight = []
        peak = []

        async def slow(result):
            in_flight.append(1)
            peak.append(len(in_flight))
            await asyncio.sleep(0.05)
            in_flight.pop()
            return result

        async def report(*args):
            return await slow(sample_report)

        async def image(*args):
            return await slow("img")

        stylist.generate_report = AsyncMock(side_effect=report)
        stylist.try_generate_style_image = AsyncMock(side_effect=image)
        service = AnalysisService(stylist, polar, timeout=5.0)

        asyncio.run(service.analyze(_request(analyze_payload)))

        assert max(peak) == 2


# =============================================================================
# Email Queue Tests
# =============================================================================

class TestEmailQueue:
    """Test post-analysis report email queueing."""

    def test_paid_checkout_email_is_used(self, service, queue_email, sample_report, analyze_payload):
        response = asyncio.run(service.analyze(
            _request(analyze_payload, checkout_id="chk_1", user_email="other@example.com")
        ))

        assert response.email_queued is True
        queue_email.assert_called_once_with(
            "buyer@example.com", sample_report, "en", "data:image/png;base64,aW1n"
        )

    def test_user_email_used_without_checkout(self, service, polar, queue_email, analyze_payload):
        asyncio.run(service.analyze(_request(analyze_payload, user_email="free@example.com")))

        polar.get_checkout.assert_not_called()
        assert queue_email.call_args.args[0] == "free@example.com"

    def test_no_email_nothing_queued(self, service, queue_email, analyze_payload):
        response = asyncio.run(service.analyze(_request(analyze_payload)))

        assert response.email_queued is False
        queue_email.assert_not_called()

    def test_queue_failure_does_not_fail_analysis(self, service, queue_email, analyze_payload):
        queue_email.side_effect = ConnectionError("redis down")

        response = asyncio.run(service.analyze(_request(analyze_payload, user_email="free@example.com")))

        assert response.report
        assert response.email_queued is False

    def test_no_queue_configured(self, stylist, polar, analyze_payload):
        service = AnalysisService(stylist, polar, queue_email=None)

        response = asyncio.run(service.analyze(_request(analyze_payload, user_email="free@example.com")))

        assert response.email_queued is False


# =============================================================================
# Failure & Refund Tests
# =============================================================================

class TestRefundOnFailure:
    """Test failure handling for paid and free analyses."""

    def test_upstream_500_in_paid_flow_is_refunded(self, service, stylist, polar, analyze_payload):
        """Given a 500 from the text API in a paid flow, the response includes refunded: true."""
        stylist.generate_report = AsyncMock(side_effect=StylistError(
            "OpenAI text error: 500", code="OPENAI_STATUS_ERROR", status_code=500,
        ))

        with pytest.raises(AnalysisFailedError) as exc_info:
            asyncio.run(service.analyze(_request(analyze_payload, checkout_id="chk_1")))

        error = exc_info.value
        assert error.status_code == 500
        assert error.to_dict()["refunded"] is True
        assert error.message == "An error occurred during AI analysis. Please try again later."

        polar.refund_checkout.assert_awaited_once()
        args, kwargs = polar.refund_checkout.call_args
        assert args[0] == "chk_1"
        assert args[1] == 990
        assert kwargs["comment"].startswith("AI analysis failed")

    def test_refund_not_issued(self, service, stylist, polar, analyze_payload):
        stylist.generate_report = AsyncMock(side_effect=StylistError("boom", status_code=500))
        polar.refund_checkout = AsyncMock(return_value=False)

        with pytest.raises(AnalysisFailedError) as exc_info:
            asyncio.run(service.analyze(_request(analyze_payload, checkout_id="chk_1")))

        assert exc_info.value.refunded is False

    def test_free_analysis_is_not_refunded(self, service, stylist, polar, analyze_payload):
        stylist.generate_report = AsyncMock(side_effect=StylistError("boom", status_code=500))

        with pytest.raises(AnalysisFailedError) as exc_info:
            asyncio.run(service.analyze(_request(analyze_payload)))

        assert exc_info.value.refunded is False
        polar.refund_checkout.assert_not_called()

    def test_polar_not_configured_is_not_refunded(self, service, stylist, polar, analyze_payload):
        polar.configured = False
        stylist.generate_report = AsyncMock(side_effect=StylistError("boom", status_code=500))

        with pytest.raises(AnalysisFailedError) as exc_info:
            asyncio.run(service.analyze(_request(analyze_payload, checkout_id="chk_1")))

        assert exc_info.value.refunded is False
        polar.refund_checkout.assert_not_called()

    def test_empty_report(self, service, stylist, analyze_payload):
        stylist.generate_report = AsyncMock(side_effect=StylistError("empty", code="EMPTY_REPORT"))

        with pytest.raises(AnalysisFailedError) as exc_info:
            asyncio.run(service.analyze(_request(analyze_payload, checkout_id="chk_1")))

        assert exc_info.value.code == "REPORT_FAILED"
        assert exc_info.value.message == "Failed to generate the report."
        assert exc_info.value.refunded is True

    def test_timeout(self, stylist, polar, analyze_payload):
        async def hang(*args):
            await asyncio.sleep(10)

        stylist.generate_report = AsyncMock(side_effect=hang)
        service = AnalysisService(stylist, polar, timeout=0.05)

        with pytest.raises(AnalysisFailedError) as exc_info:
            asyncio.run(service.analyze(_request(analyze_payload, checkout_id="chk_1", locale="ko")))

        assert exc_info.value.code == "ANALYSIS_TIMEOUT"
        assert exc_info.value.message == error_messages("ko").timeout
        assert exc_info.value.refunded is True

    def test_failed_report_cancels_style_image(self, service, stylist, analyze_payload):
        """A billed image edit must not outlive the failed analysis."""
        cancelled = []

        async def image(*args):
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        async def report(*args):
            await asyncio.sleep(0)
            raise StylistError("OpenAI text error: 500", code="OPENAI_STATUS_ERROR", status_code=500)

        stylist.generate_report = AsyncMock(side_effect=report)
        stylist.try_generate_style_image = AsyncMock(side_effect=image)

        async def run():
            with pytest.raises(AnalysisFailedError):
                await service.analyze(_request(analyze_payload, checkout_id="chk_1"))
            # Still inside the loop: the image call is already being torn down
            for _ in range(3):
                await asyncio.sleep(0)
            return list(cancelled)

        assert asyncio.run(run()) == [True]

    def test_timeout_cancels_style_image(self, stylist, polar, analyze_payload):
        cancelled = []

        async def hang(*args):
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        stylist.generate_report = AsyncMock(side_effect=hang)
        stylist.try_generate_style_image = AsyncMock(side_effect=hang)
        service = AnalysisService(stylist, polar, timeout=0.05)

        async def run():
            with pytest.raises(AnalysisFailedError):
                await service.analyze(_request(analyze_payload))
            for _ in range(3):
                await asyncio.sleep(0)
            return list(cancelled)

        assert asyncio.run(run()) == [True, True]

    def test_unexpected_error(self, service, stylist, analyze_payload):
        stylist.generate_report = AsyncMock(side_effect=KeyError("choices"))

        with pytest.raises(AnalysisFailedError) as exc_info:
            asyncio.run(service.analyze(_request(analyze_payload, checkout_id="chk_1")))

        assert exc_info.value.code == "ANALYSIS_FAILED"
        assert exc_info.value.refunded is True

    def test_refund_uses_configured_retry_policy(self, stylist, polar, analyze_payload):
        stylist.generate_report = AsyncMock(side_effect=StylistError("boom", status_code=500))
        service = AnalysisService(stylist, polar, refund_attempts=2, refund_backoff=0.5)

        with pytest.raises(AnalysisFailedError):
            asyncio.run(service.analyze(_request(analyze_payload, checkout_id="chk_1")))

        kwargs = polar.refund_checkout.call_args.kwargs
        assert kwargs["max_attempts"] == 2
        assert kwargs["backoff"] == 0.5
