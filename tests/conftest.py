"""Shared pytest fixtures and configuration.

Fixture Categories:
1. Callback payloads: one webhook delivery per event variant, plus a batched one
2. HTTP: an injected httpx.AsyncClient and the MessengerClient built on it
3. Infrastructure: mock_logfire, logfire_capture, test settings
"""

import os
from unittest.mock import MagicMock, Mock, patch

import httpx
import logfire
import pytest
import pytest_asyncio

from fbmessenger.config import Settings, get_settings
from fbmessenger.services.client import MessengerClient

GRAPH_API_URL = "https://graph.facebook.com/v18.0"
PAGE_ACCESS_TOKEN = "SOME_TOKEN"

# Suppress warnings when logfire isn't configured during tests
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")


def make_event(variant: str | None = None, body: dict | None = None, **extra) -> dict:
    """Build a raw messaging event carrying at most one variant."""
    event = {
        "sender": {"id": "USER_ID"},
        "recipient": {"id": "PAGE_ID"},
        "timestamp": 1458692752478,
    }
    if variant is not None:
        event[variant] = body
    event.update(extra)
    return event


def make_callback(*entries: list[dict]) -> dict:
    """Build a raw callback with one entry per list of events."""
    return {
        "object": "page",
        "entry": [
            {"id": f"PAGE_{i}", "time": 1458692752478 + i, "messaging": events}
            for i, events in enumerate(entries)
        ],
    }


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start each test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings():
    """Settings for webhook tests."""
    return Settings(
        messenger_verify_token="test-verify-token-123",
        messenger_app_secret=None,
        graph_api_url=GRAPH_API_URL,
    )


# =============================================================================
# Callback payloads
# =============================================================================


@pytest.fixture
def text_message_payload():
    return make_callback(
        [
            make_event(
                "message",
                {"mid": "mid.1457764197618:41d102a3e1ae206a38", "seq": 73, "text": "hello, world!"},
            )
        ]
    )


@pytest.fixture
def attachment_message_payload():
    return make_callback(
        [
            make_event(
                "message",
                {
                    "mid": "mid.1458696618141:b4ef9d19ec21086067",
                    "seq": 51,
                    "attachments": [
                        {"type": "image", "payload": {"url": "IMAGE_URL"}},
                        {
                            "type": "location",
                            "title": "Pinned Location",
                            "payload": {"coordinates": {"lat": 52.52, "long": 13.405}},
                        },
                    ],
                },
            )
        ]
    )


@pytest.fixture
def delivery_payload():
    return make_callback(
        [
            make_event(
                "delivery",
                {
                    "mids": ["mid.1458668856218:ed81099e15d3f4f233"],
                    "watermark": 1458668856253,
                    "seq": 37,
                },
            )
        ]
    )


@pytest.fixture
def postback_payload():
    return make_callback(
        [make_event("postback", {"payload": "USER_DEFINED_PAYLOAD"})]
    )


@pytest.fixture
def authentication_payload():
    return make_callback(
        [make_event("optin", {"ref": "PASS_THROUGH_PARAM"})]
    )


@pytest.fixture
def batched_payload():
    """Two entries: [message, postback] and [delivery]."""
    return make_callback(
        [
            make_event("message", {"mid": "mid.1", "seq": 1, "text": "first"}),
            make_event("postback", {"payload": "SECOND"}),
        ],
        [
            make_event("delivery", {"mids": ["mid.1"], "watermark": 3}),
        ],
    )


# =============================================================================
# HTTP
# =============================================================================


@pytest_asyncio.fixture
async def http_client():
    """Injected transport; respx intercepts its requests."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def messenger_client(http_client):
    return MessengerClient(http_client, graph_api_url=GRAPH_API_URL)


# =============================================================================
# Logfire
# =============================================================================


@pytest.fixture
def logfire_capture():
    """
    Capture Logfire logs for testing.

    This fixture patches Logfire to capture log calls for assertion.
    """
    captured_logs = []

    original_info = logfire.info
    original_warning = logfire.warning
    original_error = logfire.error

    def capture_info(*args, **kwargs):
        captured_logs.append(("info", args, kwargs))
        return original_info(*args, **kwargs)

    def capture_warning(*args, **kwargs):
        captured_logs.append(("warning", args, kwargs))
        return original_warning(*args, **kwargs)

    def capture_error(*args, **kwargs):
        captured_logs.append(("error", args, kwargs))
        return original_error(*args, **kwargs)

    with (
        patch("logfire.info", side_effect=capture_info),
        patch("logfire.warning", side_effect=capture_warning),
        patch("logfire.error", side_effect=capture_error),
    ):
        yield captured_logs


@pytest.fixture
def mock_logfire(monkeypatch):
    """
    Mock Logfire for tests that start the FastAPI app.

    Keeps the lifespan from configuring the real logfire SDK.
    """
    mock_logfire_module = MagicMock()
    mock_logfire_module.info = Mock()
    mock_logfire_module.warning = Mock()
    mock_logfire_module.error = Mock()
    mock_logfire_module.configure = Mock()
    mock_logfire_module.instrument_fastapi = Mock()
    mock_logfire_module.instrument_pydantic = Mock()

    monkeypatch.setattr("fbmessenger.logging_config.logfire", mock_logfire_module)
    monkeypatch.setattr("fbmessenger.main.logfire", mock_logfire_module)
    monkeypatch.setattr("fbmessenger.services.dispatcher.logfire", mock_logfire_module)

    return mock_logfire_module
