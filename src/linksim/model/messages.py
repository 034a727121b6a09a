from __future__ import annotations

import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

_LINE_RE = re.compile(r"^Message from node (?P<sender>-?\d+): (?P<payload>.*) \[sent:(?P<sent>-?\d+)\]$")


def now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class Message:
    sender: int
    payload: str
    sent_ms: int

    @classmethod
    def create(cls, sender: int, payload: str, sent_ms: int | None = None) -> "Message":
        # One message per line on the wire.
        flat = " ".join(str(payload).splitlines())
        return cls(sender=int(sender), payload=flat, sent_ms=now_ms() if sent_ms is None else int(sent_ms))


class SendStatus(str, Enum):
    SENT = "sent"
    UNREACHABLE_PEER = "unreachable_peer"
    IO_FAILURE = "io_failure"


@dataclass(frozen=True)
class SendResult:
    status: SendStatus
    sender: int
    peer: int
    message: Optional[Message] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.status is SendStatus.SENT


def encode_line(message: Message) -> bytes:
    line = f"Message from node {message.sender}: {message.payload} [sent:{message.sent_ms}]\n"
    return line.encode("utf-8")


def decode_line(data: bytes | str) -> Message:
    text = data.decode("utf-8") if isinstance(data, bytes) else data
    match = _LINE_RE.match(text.rstrip("\r\n"))
    if match is None:
        raise ValueError(f"malformed message line: {text!r}")
    return Message(
        sender=int(match.group("sender")),
        payload=match.group("payload"),
        sent_ms=int(match.group("sent")),
    )
