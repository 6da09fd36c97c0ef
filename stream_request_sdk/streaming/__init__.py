"""Streaming session layer.

This layer handles:
- Issuing requests with streaming forced on
- The incremental read loop and UTF-8 decoding
- Retry of issue-time failures
- Cooperative cancellation and resource release
"""

from .controller import StreamHandle, StreamSessionController
from .decoder import IncrementalTextDecoder
from .session import SessionState, StreamSession, TERMINAL_STATES

__all__ = [
    "StreamHandle",
    "StreamSessionController",
    "IncrementalTextDecoder",
    "SessionState",
    "StreamSession",
    "TERMINAL_STATES",
]
