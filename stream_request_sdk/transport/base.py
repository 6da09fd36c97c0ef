"""
Base transport interface.

The session controller only needs one capability from an HTTP binding:
"issue this request and hand me an incrementally readable body, or fail".
Each binding implements that capability here instead of the controller
probing response objects for something readable.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.requests import StreamRequestConfig


class BodyStream(ABC):
    """
    Exclusively owned, incrementally readable response body.

    Implementations must make ``release`` idempotent: the controller calls it
    on every terminal path and a second call must be a no-op.
    """

    status_code: Optional[int] = None

    @abstractmethod
    async def read(self) -> Optional[bytes]:
        """
        Read the next chunk.

        Returns:
            The next chunk of bytes, or None at end of stream
        """
        pass

    @abstractmethod
    async def release(self) -> None:
        """Release the underlying connection."""
        pass

    @property
    @abstractmethod
    def released(self) -> bool:
        pass


class TransportAdapter(ABC):
    """Produces body streams for streaming requests."""

    @abstractmethod
    async def open(self, config: StreamRequestConfig) -> BodyStream:
        """
        Issue the request with streaming forced on.

        The request must be sent without buffering the body and without a
        timeout, since the stream duration is unbounded.

        Raises:
            StreamIssueError: The request could not be sent or failed
            UnsupportedStreamError: The response has no incremental body
        """
        pass
