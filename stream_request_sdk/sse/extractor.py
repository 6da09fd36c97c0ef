"""
Stateless SSE helpers for text that is already complete.

These functions keep no state between calls and must not be used on raw
stream chunks, which may end in the middle of a frame. Use ``SSEParser``
for those.
"""

from typing import Callable, List

from ..models.events import SSEEvent
from .parser import normalize_newlines, parse_event_block, split_frames


def extract_sse_data(text: str, on_data: Callable[[str], None]) -> None:
    """
    Call ``on_data`` with the data payload of every frame in ``text``.

    Frames without data, or with empty data, are skipped. Other fields are
    ignored.
    """
    for block in split_frames(normalize_newlines(text)):
        if not block:
            continue
        parsed = parse_event_block(block)
        if parsed is not None and parsed.data:
            on_data(parsed.data)


def parse_sse_events(text: str) -> List[SSEEvent]:
    """Parse every frame in ``text``, including a trailing unterminated one."""
    events = []
    for block in split_frames(normalize_newlines(text)):
        if not block.strip():
            continue
        parsed = parse_event_block(block)
        if parsed is not None:
            events.append(parsed)
    return events
