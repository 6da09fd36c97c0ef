"""
Per-attempt stream session state.

A ``StreamSession`` is created for every issue of the request, including
each retry. It owns the attempt's body stream and cancellation bridge and
releases both exactly once when it reaches a terminal state.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from ..cancellation import CancellationBridge, CancellationToken
from ..transport.base import BodyStream

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    PENDING = "pending"
    READING = "reading"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ERRORED = "errored"


TERMINAL_STATES = frozenset({
    SessionState.COMPLETED,
    SessionState.CANCELLED,
    SessionState.ERRORED,
})


class StreamSession:
    """One attempt of a streaming request."""

    def __init__(
        self,
        attempt: int,
        token: CancellationToken,
        signal: Optional[CancellationToken] = None
    ):
        self.attempt = attempt
        self.state = SessionState.PENDING
        self.body: Optional[BodyStream] = None
        self.bridge = CancellationBridge(signal, token)
        self.chunks_delivered = 0

    @property
    def terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def wire(self) -> None:
        """Connect the external signal for the duration of this attempt."""
        self.bridge.wire()

    def attach(self, body: BodyStream) -> None:
        """Take exclusive ownership of the attempt's body stream."""
        if self.body is not None:
            raise RuntimeError("Session already owns a body stream")
        self.body = body
        self.state = SessionState.READING

    async def close(self, state: SessionState) -> bool:
        """
        Move to a terminal state, detaching the bridge and releasing the body.

        Returns:
            False if the session was already terminal (nothing is released twice)
        """
        if state not in TERMINAL_STATES:
            raise ValueError(f"{state} is not a terminal state")
        if self.terminal:
            return False

        self.state = state
        self.bridge.detach()
        if self.body is not None:
            try:
                await self.body.release()
            except Exception:
                logger.exception(f"Failed to release body stream (attempt {self.attempt})")
        return True

    def __repr__(self) -> str:
        return f"StreamSession(attempt={self.attempt}, state={self.state.value})"
