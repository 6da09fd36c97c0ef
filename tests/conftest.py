"""Shared pytest fixtures for Stream Request SDK tests."""

import pytest
from dotenv import load_dotenv

# Load environment variables from .env file for tests
load_dotenv()

from stream_request_sdk.cancellation import CancellationToken
from tests.helpers.streaming_mocks import CallbackRecorder


@pytest.fixture(autouse=True)
def clear_stream_env(monkeypatch):
    """Keep STREAM_SDK_* variables from a developer .env out of the tests."""
    for name in (
        "STREAM_SDK_RETRY",
        "STREAM_SDK_RETRY_DELAY",
        "STREAM_SDK_MAX_SSE_BUFFER",
        "STREAM_SDK_TIMEOUT",
        "STREAM_SDK_BASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def recorder():
    """Fresh callback recorder."""
    return CallbackRecorder()


@pytest.fixture
def signal_token():
    """External cancellation signal."""
    return CancellationToken()


@pytest.fixture
def sample_sse_text():
    """SSE text exercising every field, comments, and multi-line data."""
    return (
        ": keep-alive\n"
        "\n"
        "event: message\n"
        "id: 1\n"
        "data: hello\n"
        "\n"
        "data: first line\n"
        "data: second line\n"
        "retry: 3000\n"
        "\n"
        "event: ping\n"
        "\n"
        "data:no-space\n"
        "x-custom: ignored\n"
        "id:  42  \n"
        "\n"
        "data: héllo wörld ✓\n"
        "\n"
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end tests against an ASGI app")
