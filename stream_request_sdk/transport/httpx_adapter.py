"""
httpx binding for the transport interface.
"""

from typing import Optional
import logging

import httpx

from .base import BodyStream, TransportAdapter
from ..errors import UnsupportedStreamError, map_issue_error
from ..models.requests import StreamRequestConfig

logger = logging.getLogger(__name__)

# Streams have no natural end time, so every phase waits indefinitely
STREAM_TIMEOUT = httpx.Timeout(None)


class HttpxBodyStream(BodyStream):
    """Body stream backed by an unread ``httpx.Response``."""

    def __init__(self, response: httpx.Response):
        self._response = response
        self._iterator = response.aiter_bytes()
        self._released = False
        self.status_code = response.status_code

    @property
    def response(self) -> httpx.Response:
        return self._response

    @property
    def released(self) -> bool:
        return self._released

    async def read(self) -> Optional[bytes]:
        if self._released:
            return None
        try:
            return await self._iterator.__anext__()
        except StopAsyncIteration:
            return None

    async def release(self) -> None:
        if self._released:
            return
        try:
            await self._iterator.aclose()
            await self._response.aclose()
        except Exception as e:
            logger.debug(f"Error closing stream: {e}")
        # Set only once closing finished, so an interrupted release can run again
        self._released = True


class HttpxTransportAdapter(TransportAdapter):
    """
    Issues streaming requests through an ``httpx.AsyncClient``.

    The client's own default timeout is overridden per request with an
    unbounded one, and the response is returned before its body is read.
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def open(self, config: StreamRequestConfig) -> HttpxBodyStream:
        request = self.client.build_request(
            config.method,
            config.url,
            timeout=STREAM_TIMEOUT,
            **config.request_kwargs()
        )

        try:
            response = await self.client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise map_issue_error(e) from e

        if response.is_error:
            try:
                await response.aread()
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise map_issue_error(e) from e
            finally:
                await response.aclose()

        if response.is_stream_consumed or response.is_closed or \
           not isinstance(response.stream, httpx.AsyncByteStream):
            await response.aclose()
            raise UnsupportedStreamError(
                "Response body is not an incremental stream; it was read or "
                "transformed before streaming could start",
                status_code=response.status_code
            )

        return HttpxBodyStream(response)
