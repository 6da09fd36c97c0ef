"""
Streaming defaults and environment variable names.

The values here are used when neither the request configuration nor the
environment supplies an override.
"""

# Retry policy (seconds between attempts, same as a 1000 ms delay)
DEFAULT_RETRY = 0
DEFAULT_RETRY_DELAY = 1.0

# Base client configuration merged under every user-supplied config
DEFAULT_CLIENT_CONFIG = {
    "base_url": "",
    "timeout": 10.0,
    "headers": {
        "Accept": "application/json, text/event-stream",
    },
    "follow_redirects": True,
}

DEFAULT_ENCODING = "utf-8"

# Environment overrides
RETRY_ENV_VAR = "STREAM_SDK_RETRY"
RETRY_DELAY_ENV_VAR = "STREAM_SDK_RETRY_DELAY"
MAX_SSE_BUFFER_ENV_VAR = "STREAM_SDK_MAX_SSE_BUFFER"
TIMEOUT_ENV_VAR = "STREAM_SDK_TIMEOUT"
BASE_URL_ENV_VAR = "STREAM_SDK_BASE_URL"
