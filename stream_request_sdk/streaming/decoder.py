from __future__ import annotations

import codecs

from ..config.constants import DEFAULT_ENCODING


class IncrementalTextDecoder:
    """Stateful bytes -> text decoder for chunked bodies.

    A multi-byte sequence cut by a chunk boundary is held back and completed
    by the next ``decode`` call instead of being replaced or dropped. Invalid
    bytes are replaced with U+FFFD.
    """

    def __init__(self, encoding: str = DEFAULT_ENCODING, errors: str = "replace"):
        self.encoding = encoding
        self._decoder = codecs.getincrementaldecoder(encoding)(errors=errors)

    def decode(self, data: bytes) -> str:
        return self._decoder.decode(data, final=False)

    def flush(self) -> str:
        """Decode whatever is still pending at end of stream."""
        return self._decoder.decode(b"", final=True)

    @property
    def pending(self) -> bytes:
        buffered, _ = self._decoder.getstate()
        return buffered
