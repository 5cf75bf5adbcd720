"""
Tests for decoding upstream streaming chat-completion frames.
"""

import json
import logging

from core.buffers import BoundedBuffer
from core.frame_decoder import FrameDecoder, extract_delta_content


def sse_record(content=None, **delta):
    """Build one upstream `data:` record carrying a content delta."""
    if content is not None:
        delta["content"] = content
    payload = {"id": "chatcmpl-1", "choices": [{"index": 0, "delta": delta}]}
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


def test_single_chunk_with_several_records():
    decoder = FrameDecoder()
    chunk = (sse_record("Hello") + sse_record(", ") + sse_record("world") + "data: [DONE]\n\n").encode()
    assert decoder.feed(chunk) == ["Hello", ", ", "world"]


def test_record_split_across_chunks():
    decoder = FrameDecoder()
    raw = sse_record("flowchart TD").encode()
    first, second = raw[:20], raw[20:]
    assert decoder.feed(first) == []
    assert decoder.feed(second) == ["flowchart TD"]


def test_multibyte_character_split_across_chunks():
    decoder = FrameDecoder()
    raw = sse_record("开始").encode("utf-8")
    split_at = raw.index("开".encode("utf-8")) + 1
    assert decoder.feed(raw[:split_at]) == []
    assert decoder.feed(raw[split_at:]) == ["开始"]


def test_payload_split_across_data_records_is_recovered():
    """Two data records that only form valid JSON together are joined."""
    decoder = FrameDecoder()
    payload = json.dumps({"choices": [{"delta": {"content": "joined"}}]})
    half = len(payload) // 2
    chunk = f"data: {payload[:half]}\ndata: {payload[half:]}\n".encode()
    assert decoder.feed(chunk) == ["joined"]
    assert decoder.json_carry.value == ""


def test_role_only_and_empty_deltas_are_skipped():
    decoder = FrameDecoder()
    chunk = (sse_record(role="assistant") + sse_record("") + sse_record("A")).encode()
    assert decoder.feed(chunk) == ["A"]


def test_non_data_lines_and_blank_lines_are_ignored():
    decoder = FrameDecoder()
    chunk = (": keep-alive\n\nevent: message\n" + sse_record("x")).encode()
    assert decoder.feed(chunk) == ["x"]


def test_done_sentinel_clears_carry():
    decoder = FrameDecoder()
    decoder.feed(b'data: {"choices": [\n')
    assert decoder.json_carry.value == '{"choices": ['
    decoder.feed(b"data: [DONE]\n")
    assert decoder.json_carry.value == ""


def test_unterminated_final_record_is_flushed():
    decoder = FrameDecoder()
    raw = sse_record("tail").rstrip("\n").encode()
    assert decoder.feed(raw) == []
    assert decoder.flush() == ["tail"]


def test_carry_overflow_is_dropped_and_logged(caplog):
    decoder = FrameDecoder(carry_limit=10240)
    garbage = "data: {" + "x" * 6000 + "\n"
    with caplog.at_level(logging.ERROR):
        assert decoder.feed(garbage.encode()) == []
        assert decoder.feed(garbage.encode()) == []
    assert decoder.json_carry.value == ""
    assert decoder.json_carry.overflow_count == 1
    assert "buffer overflow" in caplog.text

    # Decoding continues normally afterwards
    assert decoder.feed(sse_record("after").encode()) == ["after"]


def test_extract_delta_content_tolerates_unexpected_shapes():
    assert extract_delta_content({"choices": [{"delta": {"content": "a"}}]}) == "a"
    assert extract_delta_content({"choices": []}) == ""
    assert extract_delta_content({"choices": [{"delta": None}]}) == ""
    assert extract_delta_content({"error": "boom"}) == ""
    assert extract_delta_content([1, 2]) == ""


def test_bounded_buffer_policy():
    dropped = []
    buf = BoundedBuffer("test", limit=5, on_overflow=lambda name, size: dropped.append((name, size)))
    assert buf.append("abc")
    assert buf.append("de")
    assert buf.value == "abcde"
    assert not buf.append("f")
    assert buf.value == ""
    assert dropped == [("test", 6)]
    assert buf.take() == ""


def test_deeply_nested_fragment_is_carried_not_raised():
    decoder = FrameDecoder(carry_limit=10240)
    assert decoder.feed(b"data: " + b"[" * 5000 + b"\n") == []
    assert decoder.flush() == []
    assert decoder.json_carry.overflow_count == 0

    decoder.feed(b"data: " + b"[" * 6000 + b"\n")
    decoder.feed(b"data: " + b"[" * 6000 + b"\n")
    assert decoder.json_carry.overflow_count == 1
    assert decoder.feed(sse_record("after").encode()) == ["after"]
