"""Transport bindings that turn a request into an incremental body stream."""

from .base import BodyStream, TransportAdapter
from .httpx_adapter import HttpxBodyStream, HttpxTransportAdapter, STREAM_TIMEOUT

__all__ = [
    "BodyStream",
    "TransportAdapter",
    "HttpxBodyStream",
    "HttpxTransportAdapter",
    "STREAM_TIMEOUT",
]
