"""Unit tests for the incremental SSE parser."""

import dataclasses

import pytest

from stream_request_sdk.errors import SSEBufferOverflowError
from stream_request_sdk.models.events import SSEEvent
from stream_request_sdk.sse.extractor import parse_sse_events
from stream_request_sdk.sse.parser import SSEParser, create_sse_parser, parse_event_block


def feed_all(chunks, **kwargs):
    events = []
    parser = SSEParser(events.append, **kwargs)
    for chunk in chunks:
        parser.feed(chunk)
    return events, parser


class TestParseEventBlock:
    """Test single-frame field decoding."""

    def test_all_fields(self):
        event = parse_event_block("event: update \nid: 7 \nretry: 1500\ndata: payload")
        assert event == SSEEvent(event="update", data="payload", id="7", retry=1500)

    def test_multiple_data_lines_joined_with_newline(self):
        event = parse_event_block("data: one\ndata: two\ndata:three")
        assert event.data == "one\ntwo\nthree"

    def test_only_one_leading_space_stripped(self):
        assert parse_event_block("data:  indented").data == " indented"
        assert parse_event_block("data:tight").data == "tight"

    def test_empty_data_line_counts_as_field(self):
        event = parse_event_block("data:")
        assert event is not None
        assert event.data == ""

    def test_unparseable_retry_dropped(self):
        event = parse_event_block("retry: soon\ndata: x")
        assert event.retry is None
        assert event.data == "x"

    def test_negative_retry_dropped(self):
        assert parse_event_block("retry: -5") is None

    def test_retry_with_plus_sign(self):
        assert parse_event_block("retry: +5").retry == 5

    def test_retry_with_trailing_text_dropped(self):
        assert parse_event_block("retry: 5s\ndata: x").retry is None

    def test_comments_and_unknown_fields_ignored(self):
        assert parse_event_block(": comment\nfoo: bar") is None

    def test_to_dict_only_present_fields(self):
        assert parse_event_block("data: hi").to_dict() == {"data": "hi"}

    def test_event_is_immutable(self):
        event = parse_event_block("data: hi")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.data = "changed"


class TestSSEParser:
    """Test reassembly across chunk boundaries."""

    def test_split_mid_field_emits_once(self):
        events, _ = feed_all(["data: he", "llo\n\n"])
        assert events == [SSEEvent(data="hello")]

    def test_comment_only_frame_emits_nothing(self):
        events, _ = feed_all([": comment\n\n"])
        assert events == []

    def test_multiple_frames_in_one_chunk(self):
        events, _ = feed_all(["data: a\n\ndata: b\n\n"])
        assert [e.data for e in events] == ["a", "b"]

    def test_trailing_fragment_retained_not_emitted(self):
        events, parser = feed_all(["data: a\n\ndata: partial"])
        assert [e.data for e in events] == ["a"]
        assert parser.buffer == "data: partial"

    def test_buffer_empty_after_complete_frame(self):
        _, parser = feed_all(["data: a\n\n"])
        assert parser.buffer == ""

    def test_separator_split_across_chunks(self):
        events, _ = feed_all(["data: a\n", "\ndata: b\n", "\n"])
        assert [e.data for e in events] == ["a", "b"]

    def test_crlf_line_endings(self):
        events, _ = feed_all(["event: x\r\ndata: y\r", "\n\r", "\n"])
        assert events == [SSEEvent(event="x", data="y")]

    def test_whitespace_only_frames_skipped(self):
        events, _ = feed_all(["\n\n\n\n   \n\ndata: a\n\n"])
        assert [e.data for e in events] == ["a"]

    def test_event_without_data_is_emitted(self):
        events, _ = feed_all(["event: ping\n\n"])
        assert events == [SSEEvent(event="ping")]

    def test_create_sse_parser_returns_feed_function(self):
        events = []
        feed = create_sse_parser(events.append)
        feed("data: x")
        feed("\n\n")
        assert events == [SSEEvent(data="x")]

    def test_parser_instances_are_independent(self):
        first, second = [], []
        feed_one = create_sse_parser(first.append)
        feed_two = create_sse_parser(second.append)
        feed_one("data: one")
        feed_two("data: two\n\n")
        feed_one("\n\n")
        assert [e.data for e in first] == ["one"]
        assert [e.data for e in second] == ["two"]


class TestChunkBoundaryEquivalence:
    """Incremental parsing must match the single-shot parse for any split."""

    def test_every_single_split_point(self, sample_sse_text):
        expected = parse_sse_events(sample_sse_text)
        assert len(expected) == 5

        for i in range(len(sample_sse_text) + 1):
            events, parser = feed_all([sample_sse_text[:i], sample_sse_text[i:]])
            assert events == expected, f"split at {i}"
            assert parser.buffer == ""

    def test_character_by_character(self, sample_sse_text):
        events, _ = feed_all(list(sample_sse_text))
        assert events == parse_sse_events(sample_sse_text)

    def test_every_pair_of_split_points_with_crlf(self):
        text = "event: a\r\ndata: 1\r\ndata: 2\r\n\r\n: c\r\n\r\nid: 9\r\ndata: z\r\n\r\n"
        expected = parse_sse_events(text)
        assert [e.data for e in expected] == ["1\n2", "z"]

        for i in range(len(text) + 1):
            for j in range(i, len(text) + 1):
                events, _ = feed_all([text[:i], text[i:j], text[j:]])
                assert events == expected, f"splits at {i}, {j}"


class TestBufferBound:
    """Test the optional buffer cap."""

    def test_unbounded_by_default(self):
        events, parser = feed_all(["data: " + "x" * 100_000])
        assert events == []
        assert len(parser.buffer) == 100_006

    def test_overflow_raises_after_emitting_complete_frames(self):
        events = []
        parser = SSEParser(events.append, max_buffer_size=10)
        with pytest.raises(SSEBufferOverflowError) as exc_info:
            parser.feed("data: ok\n\ndata: way too long")
        assert [e.data for e in events] == ["ok"]
        assert exc_info.value.limit == 10

    def test_parser_rejects_input_after_overflow(self):
        parser = SSEParser(lambda event: None, max_buffer_size=4)
        with pytest.raises(SSEBufferOverflowError):
            parser.feed("data: long")
        with pytest.raises(SSEBufferOverflowError):
            parser.feed("\n\n")

    def test_fragment_within_limit_is_fine(self):
        events, _ = feed_all(["data: 1234", "\n\n"], max_buffer_size=10)
        assert [e.data for e in events] == ["1234"]
