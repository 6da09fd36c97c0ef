"""
Structured logging utility for stream sessions.

Every message carries the stream id and, where relevant, the attempt number,
so interleaved logs from concurrent streams stay attributable.
"""

import logging
import time
import uuid
from typing import Optional


class StreamLogger:
    """Structured logger for one logical stream."""

    def __init__(self, stream_id: Optional[str] = None, name: str = "stream_request_sdk.streaming"):
        """
        Args:
            stream_id: Identifier included in every message (generated if omitted)
            name: Underlying logger name
        """
        self.stream_id = stream_id or str(uuid.uuid4())[:8]
        self.logger = logging.getLogger(name)
        self.start_time = time.time()

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"stream_id={self.stream_id}"]

        for key, value in kwargs.items():
            if value is not None:
                fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def elapsed_ms(self) -> int:
        return int((time.time() - self.start_time) * 1000)

    def debug(self, message: str, attempt: Optional[int] = None, **kwargs):
        self.logger.debug(self._format_message(message, attempt=attempt, **kwargs))

    def info(self, message: str, attempt: Optional[int] = None, **kwargs):
        self.logger.info(self._format_message(message, attempt=attempt, **kwargs))

    def warning(self, message: str, attempt: Optional[int] = None, **kwargs):
        self.logger.warning(self._format_message(message, attempt=attempt, **kwargs))

    def error(self, message: str, attempt: Optional[int] = None,
              error: Optional[BaseException] = None, **kwargs):
        """Log error message, adding the error type and text when given."""
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_msg'] = str(error)

        self.logger.error(self._format_message(message, attempt=attempt, **kwargs))

    def exception(self, message: str, **kwargs):
        """Log with the active traceback attached."""
        self.logger.exception(self._format_message(message, **kwargs))
