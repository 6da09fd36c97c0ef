"""
Stream Request SDK - long-lived HTTP response streaming with SSE parsing.

This package turns an ``httpx.AsyncClient`` into a consumer of incrementally
delivered response bodies:

- Callback-driven streaming with cancellation handles
- Retry of failed request issuance with a fixed delay
- Cooperative cancellation from a handle or an external token
- Incremental Server-Sent Events parsing across chunk boundaries
"""

__version__ = "0.1.0"

from .cancellation import CancellationBridge, CancellationToken
from .config import StreamSettings
from .errors import (
    SSEBufferOverflowError,
    StreamCancelledError,
    StreamError,
    StreamIssueError,
    StreamReadError,
    UnsupportedStreamError,
)
from .http.client import StreamingClient, attach_stream, create_client
from .models.events import SSEEvent
from .models.requests import ClientConfig, StreamRequestConfig
from .sse import SSEParser, create_sse_parser, extract_sse_data, parse_sse_events
from .streaming import SessionState, StreamHandle, StreamSessionController
from .transport import BodyStream, HttpxTransportAdapter, TransportAdapter

__all__ = [
    # Client
    "create_client",
    "attach_stream",
    "StreamingClient",

    # Streaming
    "StreamSessionController",
    "StreamHandle",
    "SessionState",
    "CancellationToken",
    "CancellationBridge",

    # Transport
    "TransportAdapter",
    "BodyStream",
    "HttpxTransportAdapter",

    # SSE
    "SSEEvent",
    "SSEParser",
    "create_sse_parser",
    "extract_sse_data",
    "parse_sse_events",

    # Config
    "StreamSettings",

    # Models
    "ClientConfig",
    "StreamRequestConfig",

    # Errors
    "StreamError",
    "StreamIssueError",
    "StreamReadError",
    "UnsupportedStreamError",
    "StreamCancelledError",
    "SSEBufferOverflowError",
]
