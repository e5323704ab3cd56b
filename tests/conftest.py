# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides common fixtures for testing (photos, reports, fake OpenAI)
# =============================================================================

import os
import sys

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "true")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

# Provider keys come from the environment only; keep a developer's .env out
for _key in ("POLAR_ACCESS_TOKEN", "RESEND_API_KEY"):
    os.environ.pop(_key, None)

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.fakes import make_completion, make_image_result


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def photo_bytes():
    """A few bytes standing in for a JPEG."""
    return b"\xff\xd8\xff\xe0fake-jpeg-bytes"


@pytest.fixture
def photo_data_url(photo_bytes):
    """Photo as the web client sends it."""
    return "data:image/jpeg;base64," + base64.b64encode(photo_bytes).decode()


@pytest.fixture
def sample_report():
    """Short markdown style report."""
    return (
        "## Body Type Analysis\n"
        "You have a **balanced** frame.\n\n"
        "- Straight-leg trousers\n"
        "- Cropped jackets\n\n"
        "*This report is AI-generated fashion reference material.*"
    )


@pytest.fixture
def analyze_payload(photo_data_url):
    """Complete /analyze request body."""
    return {
        "photo": photo_data_url,
        "height": "172",
        "weight": "63",
        "gender": "female",
        "locale": "en",
    }


@pytest.fixture
def mock_openai_client(sample_report):
    """AsyncOpenAI stand-in returning a report and a base64 image."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=make_completion(sample_report))
    client.images.edit = AsyncMock(return_value=make_image_result(b64_json="aW1hZ2U="))
    return client
