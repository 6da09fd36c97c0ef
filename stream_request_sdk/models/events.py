"""Event models for parsed Server-Sent Events."""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class SSEEvent:
    """One reassembled SSE frame.

    Attributes:
        event: Event type from the ``event:`` field
        data: Payload, multiple ``data:`` lines joined with ``\\n``
        id: Last event id from the ``id:`` field
        retry: Reconnection time in milliseconds from the ``retry:`` field
    """
    event: Optional[str] = None
    data: Optional[str] = None
    id: Optional[str] = None
    retry: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return only the fields that were present in the frame."""
        return {key: value for key, value in asdict(self).items() if value is not None}
