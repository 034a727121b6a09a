from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from linksim.core.types import Endpoint
from linksim.model.messages import Message


class PeerTable:
    """Directed ``(node, peer) -> endpoint`` registrations shared by all nodes.

    A registration only affects the registering node's view; the reverse
    direction needs its own ``register`` call.
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[int, int], Endpoint] = {}

    def register(self, node_id: int, peer_id: int, endpoint: Endpoint) -> bool:
        key = (int(node_id), int(peer_id))
        previous = self._entries.get(key)
        self._entries[key] = endpoint
        return previous != endpoint

    def lookup(self, node_id: int, peer_id: int) -> Endpoint | None:
        return self._entries.get((int(node_id), int(peer_id)))


@dataclass(frozen=True)
class Receipt:
    received_ms: int
    line: str
    message: Optional[Message] = None


class ReceiptLog:
    """Append-only receive log; written by one accept thread, read by anyone."""

    def __init__(self) -> None:
        self._receipts: List[Receipt] = []
        self._cond = threading.Condition()

    def append(self, receipt: Receipt) -> None:
        with self._cond:
            self._receipts.append(receipt)
            self._cond.notify_all()

    def timestamps(self) -> List[int]:
        with self._cond:
            return [r.received_ms for r in self._receipts]

    def snapshot(self) -> List[Receipt]:
        with self._cond:
            return list(self._receipts)

    def wait_for(self, message: Message, timeout: float) -> bool:
        deadline = time.monotonic() + max(0.0, timeout)
        with self._cond:
            while not any(r.message == message for r in self._receipts):
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                self._cond.wait(remaining)
            return True

    def __len__(self) -> int:
        with self._cond:
            return len(self._receipts)
