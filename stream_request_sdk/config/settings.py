from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .constants import (
    BASE_URL_ENV_VAR,
    DEFAULT_CLIENT_CONFIG,
    DEFAULT_RETRY,
    DEFAULT_RETRY_DELAY,
    MAX_SSE_BUFFER_ENV_VAR,
    RETRY_DELAY_ENV_VAR,
    RETRY_ENV_VAR,
    TIMEOUT_ENV_VAR,
)


@dataclass
class StreamSettings:
    """Process-wide defaults, optionally overridden through the environment."""
    retry: int = DEFAULT_RETRY
    retry_delay: float = DEFAULT_RETRY_DELAY
    max_sse_buffer: Optional[int] = None
    timeout: float = DEFAULT_CLIENT_CONFIG["timeout"]
    base_url: str = DEFAULT_CLIENT_CONFIG["base_url"]

    @classmethod
    def from_env(cls) -> "StreamSettings":
        """Build settings from ``STREAM_SDK_*`` environment variables."""
        max_buffer = os.getenv(MAX_SSE_BUFFER_ENV_VAR)
        return cls(
            retry=int(os.getenv(RETRY_ENV_VAR, str(DEFAULT_RETRY))),
            retry_delay=float(os.getenv(RETRY_DELAY_ENV_VAR, str(DEFAULT_RETRY_DELAY))),
            max_sse_buffer=int(max_buffer) if max_buffer else None,
            timeout=float(os.getenv(TIMEOUT_ENV_VAR, str(DEFAULT_CLIENT_CONFIG["timeout"]))),
            base_url=os.getenv(BASE_URL_ENV_VAR, DEFAULT_CLIENT_CONFIG["base_url"]),
        )

    def client_overrides(self) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {"timeout": self.timeout}
        if self.base_url:
            overrides["base_url"] = self.base_url
        return overrides
