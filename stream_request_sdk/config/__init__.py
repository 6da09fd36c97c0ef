"""Configuration defaults and environment-driven settings."""

from .constants import (
    DEFAULT_CLIENT_CONFIG,
    DEFAULT_ENCODING,
    DEFAULT_RETRY,
    DEFAULT_RETRY_DELAY,
)
from .settings import StreamSettings

__all__ = [
    "DEFAULT_CLIENT_CONFIG",
    "DEFAULT_ENCODING",
    "DEFAULT_RETRY",
    "DEFAULT_RETRY_DELAY",
    "StreamSettings",
]
