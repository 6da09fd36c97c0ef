from .events import SSEEvent
from .requests import ClientConfig, StreamRequestConfig

__all__ = [
    "SSEEvent",
    "ClientConfig",
    "StreamRequestConfig",
]
