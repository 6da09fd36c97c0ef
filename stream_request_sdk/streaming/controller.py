"""
Streaming request lifecycle.

``StreamSessionController.start`` issues a request with streaming forced on,
drives the read loop as an asyncio task and reports through callbacks:

- ``on_chunk(text)`` for every non-empty decoded chunk, in arrival order
- ``on_complete()`` once, after the last chunk
- ``on_error(error)`` once, with a ``StreamError`` subclass
- ``on_attempt(attempt)`` (optional) when an attempt starts reading

Exactly one of ``on_complete`` / ``on_error`` fires per call to ``start``,
no matter how many retry attempts were made. Callbacks may be plain
functions or coroutine functions.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from .decoder import IncrementalTextDecoder
from .session import SessionState, StreamSession
from ..cancellation import CancellationToken
from ..errors import (
    StreamCancelledError,
    StreamError,
    StreamIssueError,
    StreamReadError,
    UnsupportedStreamError,
    map_issue_error,
    map_read_error,
)
from ..models.requests import StreamRequestConfig
from ..observability.logging import StreamLogger
from ..transport.base import BodyStream, TransportAdapter

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[str], Union[None, Awaitable[None]]]
CompleteCallback = Callable[[], Union[None, Awaitable[None]]]
ErrorCallback = Callable[[StreamError], Union[None, Awaitable[None]]]
AttemptCallback = Callable[[int], Union[None, Awaitable[None]]]


async def _invoke(callback: Optional[Callable[..., Any]], *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class StreamHandle:
    """
    One logical stream: the attempt sequence behind a single ``start`` call.

    Calling the handle cancels the stream. Cancelling is idempotent and safe
    at any point; once the stream reached a terminal state it does nothing.
    ``await handle`` (or ``await handle.wait()``) waits for the terminal state.
    """

    def __init__(
        self,
        transport: TransportAdapter,
        config: StreamRequestConfig,
        on_chunk: Optional[ChunkCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        stream_id: Optional[str] = None,
        on_attempt: Optional[AttemptCallback] = None
    ):
        self.transport = transport
        self.config = config
        self.on_chunk = on_chunk
        self.on_complete = on_complete
        self.on_error = on_error
        self.on_attempt = on_attempt

        self.token = CancellationToken()
        self.attempt = 0
        self.sessions: List[StreamSession] = []
        self.log = StreamLogger(stream_id)

        self._task: Optional[asyncio.Task] = None
        self._started = False
        self._finished = False
        self._interruptible = False
        self._cancel_source: Optional[str] = None
        self._outcome: Optional[SessionState] = None
        self.token.add_observer(self._on_cancelled)

    # Public API -------------------------------------------------------------

    @property
    def stream_id(self) -> str:
        return self.log.stream_id

    @property
    def session(self) -> Optional[StreamSession]:
        return self.sessions[-1] if self.sessions else None

    @property
    def done(self) -> bool:
        return self._finished

    @property
    def outcome(self) -> Optional[SessionState]:
        """Terminal state of the logical stream, None while running."""
        return self._outcome

    def cancel(self) -> None:
        """Cancel the stream; later calls are no-ops."""
        if self._finished or self.token.fired:
            return
        self._cancel_source = "manual"
        self.token.fire("manual")

    __call__ = cancel

    async def wait(self) -> Optional[SessionState]:
        if self._task is not None:
            await asyncio.wait([self._task])
        return self._outcome

    def __await__(self):
        return self.wait().__await__()

    # Lifecycle --------------------------------------------------------------

    def begin(self) -> "StreamHandle":
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self

    def _on_cancelled(self, reason: Optional[str]) -> None:
        if self._cancel_source is None:
            self._cancel_source = "signal"
        task = self._task
        if self._finished or not self._started or task is None or task.done():
            return
        # Releasing the body or reporting the outcome must run to the end
        if not self._interruptible:
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # Cancelled from inside a callback: the read loop notices the token itself
        if task is not current:
            task.cancel()

    async def _run(self) -> None:
        self._started = True
        self.log.debug("Starting stream request", method=self.config.method, url=self.config.url)
        try:
            await self._drive()
        except asyncio.CancelledError:
            if not self.token.fired:
                await self._close_session(SessionState.CANCELLED)
                self._finished = True
                self._outcome = SessionState.CANCELLED
                raise

        if self.token.fired and not self._finished:
            await self._close_session(SessionState.CANCELLED)
            source = self._cancel_source or "manual"
            self.log.info("Stream request cancelled", attempt=self.attempt, source=source)
            await self._finish(
                SessionState.CANCELLED,
                self.on_error,
                StreamCancelledError(
                    "Stream request cancelled manually" if source == "manual"
                    else "Stream request cancelled by signal",
                    source=source,
                    attempts=self.attempt + 1
                )
            )

    async def _drive(self) -> None:
        while not self.token.fired:
            session = StreamSession(self.attempt, self.token, self.config.signal)
            self.sessions.append(session)
            session.wire()
            if self.token.fired:
                return

            try:
                body = await self._interruptibly(self._issue())
            except UnsupportedStreamError as e:
                await self._fail(session, e)
                return
            except Exception as e:
                error = map_issue_error(e)
                if await self._retry_or_fail(session, error):
                    continue
                return

            session.attach(body)
            try:
                await self._begin_attempt()
                completed = await self._interruptibly(self._read(session))
            except Exception as e:
                error = map_read_error(e)
                if await self._retry_or_fail(session, error):
                    continue
                return

            if not completed:
                return
            await session.close(SessionState.COMPLETED)
            self.log.info(
                "Stream request completed",
                attempt=self.attempt,
                chunks=session.chunks_delivered,
                duration_ms=self.log.elapsed_ms()
            )
            await self._finish(SessionState.COMPLETED, self.on_complete)
            return

    async def _interruptibly(self, awaitable: Awaitable[Any]) -> Any:
        """Await ``awaitable`` while allowing a fired token to cancel the task."""
        self._interruptible = True
        try:
            return await awaitable
        finally:
            self._interruptible = False

    async def _issue(self) -> BodyStream:
        if self.attempt > 0:
            await asyncio.sleep(self.config.retry_delay)
            self.log.info("Retrying stream request", attempt=self.attempt)
        return await self.transport.open(self.config)

    async def _begin_attempt(self) -> None:
        try:
            await _invoke(self.on_attempt, self.attempt)
        except Exception as e:
            raise StreamReadError(f"on_attempt callback failed: {e}", original_error=e) from e

    async def _read(self, session: StreamSession) -> bool:
        """
        Read the body until it ends.

        Returns:
            True at end of stream, False if the token fired
        """
        decoder = IncrementalTextDecoder()
        while True:
            if self.token.fired:
                return False
            data = await session.body.read()
            if self.token.fired:
                return False
            if data is None:
                tail = decoder.flush()
                if tail:
                    await self._emit_chunk(session, tail)
                return not self.token.fired
            text = decoder.decode(data)
            if text:
                await self._emit_chunk(session, text)

    async def _emit_chunk(self, session: StreamSession, text: str) -> None:
        if self.token.fired:
            return
        try:
            await _invoke(self.on_chunk, text)
        except Exception as e:
            error = StreamReadError(f"on_chunk callback failed: {e}", original_error=e)
            raise error from e
        session.chunks_delivered += 1

    # Failure handling -------------------------------------------------------

    def _should_retry(self, error: StreamError) -> bool:
        if self.token.fired or not error.is_retryable:
            return False
        if isinstance(error, StreamReadError) and not self.config.retry_on_read_error:
            return False
        return self.attempt < self.config.retry

    async def _retry_or_fail(self, session: StreamSession, error: StreamError) -> bool:
        """Close the failed attempt; return True if another attempt should run."""
        if self._should_retry(error):
            await session.close(SessionState.ERRORED)
            self.log.warning(
                "Stream attempt failed, retrying",
                attempt=self.attempt,
                error=str(error),
                retry_delay=self.config.retry_delay
            )
            self.attempt += 1
            return True
        if self.token.fired:
            return False
        await self._fail(session, error)
        return False

    async def _fail(self, session: StreamSession, error: StreamError) -> None:
        await session.close(SessionState.ERRORED)
        attempts = self.attempt + 1
        if attempts > 1 and isinstance(error, StreamIssueError):
            error = StreamIssueError(
                f"Stream request failed after {attempts} attempts: {error.message}",
                status_code=error.status_code,
                original_error=error.original_error or error
            )
        error.attempts = attempts
        self.log.error("Stream request failed", attempt=self.attempt, error=error)
        await self._finish(SessionState.ERRORED, self.on_error, error)

    async def _close_session(self, state: SessionState) -> None:
        session = self.session
        if session is not None:
            await session.close(state)

    async def _finish(self, outcome: SessionState, callback: Optional[Callable[..., Any]], *args: Any) -> None:
        self._finished = True
        self._outcome = outcome
        try:
            await _invoke(callback, *args)
        except Exception:
            self.log.exception("Stream terminal callback failed", outcome=outcome.value)


class StreamSessionController:
    """Starts streaming requests over a transport adapter."""

    def __init__(self, transport: TransportAdapter):
        self.transport = transport

    def start(
        self,
        config: Union[StreamRequestConfig, Dict[str, Any]],
        on_chunk: Optional[ChunkCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        stream_id: Optional[str] = None,
        on_attempt: Optional[AttemptCallback] = None
    ) -> StreamHandle:
        """
        Issue a streaming request and return its cancellation handle.

        Must be called from a running event loop. The request is issued in a
        background task; the handle is returned before any I/O happens.

        Args:
            config: Request configuration (model or dict of its fields)
            on_chunk: Receives each decoded text chunk
            on_complete: Called once when the body ends
            on_error: Called once with the terminal StreamError
            stream_id: Identifier for log messages (generated if omitted)
            on_attempt: Called with the attempt number once each attempt has
                a body and before its first chunk; chunk consumers that keep
                state use it to start over

        Returns:
            StreamHandle; call it to cancel
        """
        if not isinstance(config, StreamRequestConfig):
            config = StreamRequestConfig.model_validate(config)
        handle = StreamHandle(
            self.transport,
            config,
            on_chunk=on_chunk,
            on_complete=on_complete,
            on_error=on_error,
            stream_id=stream_id,
            on_attempt=on_attempt
        )
        return handle.begin()
