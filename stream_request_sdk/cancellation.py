"""
Cooperative cancellation primitives.

``CancellationToken`` is the single source of truth for "this stream must
stop". It is used both for the token a session owns and for the optional
signal a caller passes in. ``CancellationBridge`` wires the caller's signal
into the session's token for the lifetime of one attempt.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

Observer = Callable[[Optional[str]], None]


class CancellationToken:
    """Two-state flag (armed -> fired) with one-shot observers."""

    def __init__(self) -> None:
        self._fired = False
        self._reason: Optional[str] = None
        self._observers: List[Observer] = []

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def fire(self, reason: Optional[str] = None) -> bool:
        """
        Fire the token.

        Returns:
            True if this call fired the token, False if it was already fired
        """
        if self._fired:
            return False
        self._fired = True
        self._reason = reason
        observers, self._observers = self._observers, []
        for observer in observers:
            try:
                observer(reason)
            except Exception:
                logger.exception("Cancellation observer failed")
        return True

    def add_observer(self, observer: Observer) -> Callable[[], None]:
        """
        Register a one-shot observer called when the token fires.

        Returns:
            A zero-argument callable that deregisters the observer. Calling it
            more than once, or after the token fired, is a no-op.
        """
        self._observers.append(observer)

        def remove() -> None:
            try:
                self._observers.remove(observer)
            except ValueError:
                pass

        return remove

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def __repr__(self) -> str:
        state = "fired" if self._fired else "armed"
        return f"CancellationToken({state})"


class CancellationBridge:
    """
    Connects an optional external signal to a session's internal token.

    Only the external -> internal direction is wired: an internal cancel
    must not fire a signal the caller may share with other streams.
    """

    def __init__(self, external: Optional[CancellationToken], internal: CancellationToken):
        self.external = external
        self.internal = internal
        self._remove: Optional[Callable[[], None]] = None

    def wire(self) -> "CancellationBridge":
        """Fire immediately if the signal is already fired, otherwise observe it."""
        if self.external is None or self._remove is not None:
            return self
        if self.external.fired:
            self.internal.fire(self.external.reason or "signal")
            return self
        self._remove = self.external.add_observer(self._forward)
        return self

    def _forward(self, reason: Optional[str]) -> None:
        self._remove = None
        self.internal.fire(reason or "signal")

    def detach(self) -> None:
        """Deregister the observer; safe to call repeatedly."""
        if self._remove is not None:
            self._remove()
            self._remove = None

    @property
    def attached(self) -> bool:
        return self._remove is not None
