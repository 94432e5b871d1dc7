"""Shared pytest fixtures and configuration.

Fixture Categories:
1. Settings: test_settings, facebook_url, direqt_fetch_url
2. Services: mock_messaging_service, direqt_service, message_processor
3. Payloads: make_webhook_payload, text_event
4. Infrastructure: respx_mock, test_client, logfire_capture
"""

import os
from unittest.mock import patch

import pytest

try:
    import respx
except ImportError:
    respx = None

try:
    import logfire
except ImportError:
    logfire = None

from src.config import Settings, get_settings
from src.services.direqt_service import DireqtService
from src.services.message_processor import MessageProcessor
from src.services.messaging_protocol import MockMessagingService

# Tests never call logfire.configure(); keep logfire quiet about it
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

FACEBOOK_API_ROOT = "https://graph.facebook.test/v2.6/me/messages"
DIREQT_API_ROOT = "https://api.direqt.test"


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def test_settings():
    """Settings pointing both APIs at test hosts."""
    return Settings(
        page_access_token="test-page-token",
        verify_token="test-verify-token",
        facebook_api_root=FACEBOOK_API_ROOT,
        direqt_api_key="test-direqt-key",
        direqt_api_secret=None,
        direqt_api_root=DIREQT_API_ROOT,
        env="local",
        logfire_token=None,
        sentry_dsn=None,
    )


@pytest.fixture
def facebook_url():
    return FACEBOOK_API_ROOT


@pytest.fixture
def direqt_fetch_url():
    return f"{DIREQT_API_ROOT}/fetch"


# =============================================================================
# Services
# =============================================================================


@pytest.fixture
def mock_messaging_service():
    """Mock messaging service that records every payload it is asked to send."""
    return MockMessagingService()


@pytest.fixture
def direqt_service(test_settings, mock_messaging_service):
    """DireqtService relaying through the mock messaging service."""
    return DireqtService(settings=test_settings, messaging=mock_messaging_service)


@pytest.fixture
def message_processor(mock_messaging_service, direqt_service):
    """MessageProcessor wired to the mock messaging service."""
    return MessageProcessor(messaging=mock_messaging_service, direqt=direqt_service)


# =============================================================================
# Payloads
# =============================================================================


@pytest.fixture
def make_webhook_payload():
    """Build a page webhook body with one entry per given messaging event list."""

    def _make(*entries_events, object_type="page"):
        return {
            "object": object_type,
            "entry": [
                {"id": "page-123", "time": 1234567890, "messaging": list(events)}
                for events in entries_events
            ],
        }

    return _make


@pytest.fixture
def text_event():
    """Build a messaging event carrying a text message."""

    def _make(sender_id: str, text: str) -> dict:
        return {
            "sender": {"id": sender_id},
            "recipient": {"id": "page-123"},
            "timestamp": 1234567890,
            "message": {"mid": "mid.1", "text": text},
        }

    return _make


# =============================================================================
# Infrastructure
# =============================================================================


@pytest.fixture
def respx_mock():
    """Respx mock fixture for HTTP mocking."""
    if respx is None:
        pytest.skip("respx not available")
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def test_client(test_settings):
    """FastAPI TestClient with settings overridden for the test hosts."""
    from fastapi.testclient import TestClient

    from src.main import app

    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def logfire_capture():
    """
    Capture Logfire logs for testing.

    This fixture patches Logfire to capture log calls for assertion.
    """
    if logfire is None:
        pytest.skip("logfire not available")

    captured_logs = []

    original_info = logfire.info
    original_error = logfire.error

    def capture_info(*args, **kwargs):
        captured_logs.append(("info", args, kwargs))
        return original_info(*args, **kwargs)

    def capture_error(*args, **kwargs):
        captured_logs.append(("error", args, kwargs))
        return original_error(*args, **kwargs)

    with (
        patch("logfire.info", side_effect=capture_info),
        patch("logfire.error", side_effect=capture_error),
    ):
        yield captured_logs
