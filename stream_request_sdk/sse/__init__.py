"""Server-Sent Events parsing.

- ``SSEParser`` / ``create_sse_parser``: incremental, for stream chunks
- ``extract_sse_data`` / ``parse_sse_events``: stateless, for complete text
"""

from .extractor import extract_sse_data, parse_sse_events
from .parser import SSEParser, create_sse_parser, parse_event_block

__all__ = [
    "SSEParser",
    "create_sse_parser",
    "parse_event_block",
    "extract_sse_data",
    "parse_sse_events",
]
