"""
Error types for streaming requests.

Every failure inside a stream session is resolved into one of these
exceptions and delivered through the ``on_error`` callback, so callers can
branch on the exception type instead of parsing messages.
"""

from typing import Optional

import httpx


class StreamError(Exception):
    """
    Base exception for streaming request errors.

    Attributes:
        message: Error message
        status_code: HTTP status code if applicable
        attempts: Number of attempts made before this error was reported
        is_retryable: Whether the retry policy may re-issue the request
        original_error: The original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        attempts: int = 1,
        original_error: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.attempts = attempts
        self.is_retryable = False
        self.original_error = original_error


class StreamIssueError(StreamError):
    """The request could not be sent or answered with an error status."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, **kwargs)
        self.is_retryable = True


class StreamReadError(StreamError):
    """The body stream failed after reading had started."""


class UnsupportedStreamError(StreamError):
    """The response body cannot be consumed incrementally."""


class StreamCancelledError(StreamError):
    """
    Cancellation notice.

    ``source`` is ``"manual"`` when the returned handle was invoked and
    ``"signal"`` when an external cancellation token fired.
    """

    def __init__(self, message: str = "Stream request cancelled", source: str = "manual", **kwargs):
        super().__init__(message, **kwargs)
        self.source = source


class SSEBufferOverflowError(Exception):
    """The SSE parser buffer grew past its configured bound."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"SSE buffer holds {size} characters without a frame separator (limit {limit})"
        )
        self.size = size
        self.limit = limit


def map_issue_error(error: Exception) -> StreamError:
    """
    Map a transport-level exception raised while issuing a request.

    Args:
        error: The exception raised by the HTTP client

    Returns:
        StreamError subclass with status code and original error attached
    """
    if isinstance(error, StreamError):
        return error

    status_code = None
    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code
        message = f"Stream request failed with status {status_code}"
    elif isinstance(error, httpx.TimeoutException):
        message = f"Stream request timed out: {error}"
    elif isinstance(error, httpx.TransportError):
        message = f"Stream request could not be sent: {error}"
    else:
        message = str(error) or "Stream request failed"

    return StreamIssueError(message, status_code=status_code, original_error=error)


def map_read_error(error: Exception) -> StreamError:
    """Map an exception raised while reading the body stream."""
    if isinstance(error, StreamError):
        return error
    read_error = StreamReadError(f"Read stream failed: {error}", original_error=error)
    # Only eligible when the request opts into mid-stream retries
    read_error.is_retryable = True
    return read_error
