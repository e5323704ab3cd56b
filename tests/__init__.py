# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the AJY Stylist API:
# - test_api.py / test_auth.py: Endpoint tests (TestClient, dependency overrides)
# - test_analysis_service.py: Analysis orchestration and refund-on-failure
# - test_polar_service.py / test_email_service.py: Provider clients (httpx mocks)
# - test_stylist.py / test_prompts.py: OpenAI agent and prompts
# - test_tasks.py: Celery report email task
# - test_lib.py / test_locale.py: Utilities and localized messages
#
# Run tests with: pytest
# =============================================================================
