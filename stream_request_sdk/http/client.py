"""
Client facade.

``create_client`` builds an ``httpx.AsyncClient`` from merged defaults and
wraps it in a ``StreamingClient``; ``attach_stream`` wraps a client the
caller already has. Both give access to ``stream`` (callback-driven
streaming with retry and cancellation) next to plain ``request`` calls.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Union

import httpx

from .hooks import install_default_hooks
from ..config.constants import DEFAULT_CLIENT_CONFIG
from ..config.settings import StreamSettings
from ..models.events import SSEEvent
from ..models.requests import ClientConfig, StreamRequestConfig
from ..sse.parser import SSEParser
from ..streaming.controller import (
    AttemptCallback,
    ChunkCallback,
    CompleteCallback,
    ErrorCallback,
    StreamHandle,
    StreamSessionController,
)
from ..transport.httpx_adapter import HttpxTransportAdapter

RequestConfig = Union[StreamRequestConfig, Dict[str, Any], None]


def merge_client_config(*configs: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge client configs left to right; ``headers`` and ``params`` merge key-wise."""
    merged: Dict[str, Any] = {}
    for config in configs:
        if not config:
            continue
        for key, value in config.items():
            if key in ("headers", "params") and isinstance(merged.get(key), dict) and value:
                merged[key] = {**merged[key], **value}
            else:
                merged[key] = dict(value) if isinstance(value, dict) else value
    return merged


class StreamingClient:
    """An ``httpx.AsyncClient`` with streaming-session support."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Optional[StreamSettings] = None,
        owns_client: bool = False
    ):
        self.client = client
        self.settings = settings or StreamSettings()
        self.controller = StreamSessionController(HttpxTransportAdapter(client))
        self._owns_client = owns_client

    def _build_config(self, config: RequestConfig, fields: Dict[str, Any]) -> StreamRequestConfig:
        if isinstance(config, StreamRequestConfig):
            return config.model_copy(update=fields) if fields else config
        data: Dict[str, Any] = {
            "retry": self.settings.retry,
            "retry_delay": self.settings.retry_delay,
        }
        data.update(config or {})
        data.update(fields)
        return StreamRequestConfig.model_validate(data)

    def stream(
        self,
        config: RequestConfig = None,
        on_chunk: Optional[ChunkCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        on_attempt: Optional[AttemptCallback] = None,
        **fields: Any
    ) -> StreamHandle:
        """
        Start a streaming request.

        Args:
            config: StreamRequestConfig or dict of its fields
            on_chunk: Receives each decoded text chunk
            on_complete: Called once when the body ends
            on_error: Called once with the terminal StreamError
            on_attempt: Called with the attempt number when an attempt starts reading
            **fields: Extra StreamRequestConfig fields (e.g. ``url=...``)

        Returns:
            StreamHandle; call it to cancel, await it to wait for the end
        """
        request_config = self._build_config(config, fields)
        return self.controller.start(
            request_config,
            on_chunk=on_chunk,
            on_complete=on_complete,
            on_error=on_error,
            on_attempt=on_attempt
        )

    def stream_sse(
        self,
        config: RequestConfig = None,
        on_event: Optional[Callable[[SSEEvent], Any]] = None,
        on_complete: Optional[CompleteCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        **fields: Any
    ) -> StreamHandle:
        """
        Start a streaming request and route its chunks through an SSEParser.

        Every attempt gets a fresh parser, so a frame cut off by a failed
        attempt is dropped instead of being joined to the next response.
        A parser overflow (see ``StreamSettings.max_sse_buffer``) ends the
        stream through ``on_error``.
        """
        parsers: List[SSEParser] = []

        def new_parser(attempt: int) -> None:
            parsers.append(SSEParser(
                on_event or (lambda event: None),
                max_buffer_size=self.settings.max_sse_buffer
            ))

        def feed(text: str) -> None:
            parsers[-1].feed(text)

        return self.stream(
            config,
            on_chunk=feed,
            on_complete=on_complete,
            on_error=on_error,
            on_attempt=new_parser,
            **fields
        )

    async def request(self, method: str, url: str, **kwargs: Any) -> Any:
        """
        Plain request/response call.

        Returns:
            Decoded JSON for JSON responses, text otherwise

        Raises:
            httpx.HTTPStatusError: For 4xx/5xx responses
        """
        response = await self.client.request(method, url, **kwargs)
        response.raise_for_status()
        content_type = response.headers.get("content-type", "")
        if "json" in content_type:
            return response.json()
        return response.text

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "StreamingClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def create_client(
    config: Optional[Union[ClientConfig, Dict[str, Any]]] = None,
    settings: Optional[StreamSettings] = None,
    **overrides: Any
) -> StreamingClient:
    """
    Create a StreamingClient over a new ``httpx.AsyncClient``.

    Precedence (lowest first): ``DEFAULT_CLIENT_CONFIG``, ``settings``,
    ``config``, keyword ``overrides``.
    """
    if isinstance(config, ClientConfig):
        config = config.model_dump(exclude_none=True)
    elif config is not None:
        config = ClientConfig.model_validate(config).model_dump(exclude_none=True)

    merged = merge_client_config(
        DEFAULT_CLIENT_CONFIG,
        settings.client_overrides() if settings else None,
        config,
        overrides
    )
    client = install_default_hooks(httpx.AsyncClient(**merged))
    return StreamingClient(client, settings=settings, owns_client=True)


def attach_stream(
    client: httpx.AsyncClient,
    settings: Optional[StreamSettings] = None
) -> StreamingClient:
    """Wrap an existing client; the caller keeps ownership of it."""
    return StreamingClient(client, settings=settings, owns_client=False)
