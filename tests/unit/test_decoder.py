"""Unit tests for the incremental text decoder."""

from stream_request_sdk.streaming.decoder import IncrementalTextDecoder


def test_ascii_passthrough():
    decoder = IncrementalTextDecoder()
    assert decoder.decode(b"hello") == "hello"


def test_two_byte_sequence_split():
    decoder = IncrementalTextDecoder()
    assert decoder.decode(b"caf\xc3") == "caf"
    assert decoder.pending == b"\xc3"
    assert decoder.decode(b"\xa9!") == "é!"
    assert decoder.pending == b""


def test_four_byte_sequence_split_byte_by_byte():
    decoder = IncrementalTextDecoder()
    encoded = "\U0001F600".encode("utf-8")
    pieces = [decoder.decode(encoded[i:i + 1]) for i in range(len(encoded))]
    assert pieces == ["", "", "", "\U0001F600"]


def test_flush_replaces_incomplete_tail():
    decoder = IncrementalTextDecoder()
    decoder.decode(b"ok\xe2\x9c")
    assert decoder.flush() == "�"


def test_invalid_bytes_replaced():
    decoder = IncrementalTextDecoder()
    assert decoder.decode(b"a\xffb") == "a�b"
