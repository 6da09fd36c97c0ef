"""
Incremental Server-Sent Events parser.

Chunks delivered by a streaming response do not line up with SSE frames: a
frame, a line, or even a field name can be split across chunks. ``SSEParser``
keeps the unterminated tail of the input in a buffer and only parses frames
once their terminating blank line has arrived.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from ..errors import SSEBufferOverflowError
from ..models.events import SSEEvent

FRAME_SEPARATOR = "\n\n"

EventCallback = Callable[[SSEEvent], None]


def normalize_newlines(text: str) -> str:
    """Collapse CRLF pairs to LF; a trailing lone CR is left for the next chunk."""
    return text.replace("\r\n", "\n")


def split_frames(text: str) -> List[str]:
    return text.split(FRAME_SEPARATOR)


def parse_event_block(block: str) -> Optional[SSEEvent]:
    """
    Parse one frame into an SSEEvent.

    ``retry:`` must be a non-negative integer (an optional leading ``+`` is
    allowed); any other value, including digits followed by other text, is
    ignored.

    Args:
        block: Frame text without its terminating blank line

    Returns:
        SSEEvent, or None when the frame carries no recognised field
    """
    event = None
    event_id = None
    retry = None
    data_lines: List[str] = []

    for line in block.split("\n"):
        if line.startswith("data:"):
            content = line[5:]
            data_lines.append(content[1:] if content.startswith(" ") else content)
        elif line.startswith("event:"):
            event = line[6:].strip()
        elif line.startswith("id:"):
            event_id = line[3:].strip()
        elif line.startswith("retry:"):
            value = line[6:].strip()
            digits = value[1:] if value.startswith("+") else value
            if digits.isascii() and digits.isdigit():
                retry = int(digits)
        # Comments (":") and unknown fields are ignored

    data = "\n".join(data_lines) if data_lines else None

    if event is None and data is None and event_id is None and retry is None:
        return None
    return SSEEvent(event=event, data=data, id=event_id, retry=retry)


class SSEParser:
    """
    Stateful SSE frame reassembly.

    One instance per stream; it cannot be reset. Feed it decoded text chunks
    in arrival order and ``on_event`` is called once per complete frame.
    """

    def __init__(self, on_event: EventCallback, max_buffer_size: Optional[int] = None):
        """
        Args:
            on_event: Called with each reassembled SSEEvent
            max_buffer_size: Upper bound (in characters) for the retained
                unterminated fragment; None means unbounded
        """
        self._on_event = on_event
        self._buffer = ""
        self._max_buffer_size = max_buffer_size
        self._overflowed = False

    @property
    def buffer(self) -> str:
        """The retained fragment still waiting for its frame separator."""
        return self._buffer

    def feed(self, chunk: str) -> None:
        """
        Append a chunk and emit every frame it completes.

        Raises:
            SSEBufferOverflowError: If the retained fragment exceeds
                ``max_buffer_size``. The parser rejects all later input.
        """
        if self._overflowed:
            raise SSEBufferOverflowError(len(self._buffer), self._max_buffer_size)

        parts = split_frames(normalize_newlines(self._buffer + chunk))
        self._buffer = parts.pop()

        for block in parts:
            if not block.strip():
                continue
            parsed = parse_event_block(block)
            if parsed is not None:
                self._on_event(parsed)

        if self._max_buffer_size is not None and len(self._buffer) > self._max_buffer_size:
            self._overflowed = True
            raise SSEBufferOverflowError(len(self._buffer), self._max_buffer_size)

    __call__ = feed


def create_sse_parser(
    on_event: EventCallback,
    max_buffer_size: Optional[int] = None
) -> Callable[[str], None]:
    """Return a feed function bound to a fresh SSEParser."""
    return SSEParser(on_event, max_buffer_size=max_buffer_size).feed
