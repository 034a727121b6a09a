from __future__ import annotations

import pytest

from linksim.model.messages import Message, decode_line, encode_line


def test_encode_line_wire_format() -> None:
    msg = Message(sender=4, payload="hello there", sent_ms=1700000000123)
    assert encode_line(msg) == b"Message from node 4: hello there [sent:1700000000123]\n"


def test_decode_line_accepts_payload_with_brackets_and_colons() -> None:
    line = "Message from node 12: a: [b] c [sent:42]\n"
    msg = decode_line(line)
    assert msg == Message(sender=12, payload="a: [b] c", sent_ms=42)


def test_decode_line_rejects_unframed_text() -> None:
    with pytest.raises(ValueError):
        decode_line(b"hello\n")


def test_create_flattens_newlines_and_stamps_time() -> None:
    msg = Message.create(2, "line one\nline two")
    assert msg.payload == "line one line two"
    assert msg.sent_ms > 0
    assert encode_line(msg).count(b"\n") == 1
