from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Mapping, Optional, Sequence

from linksim.core.errors import InvalidRequestError
from linksim.model.messages import SendResult
from linksim.runtime.node import NodeActor


class HopState(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    ACKED = "acked"
    FAILED = "failed"


@dataclass
class HopRecord:
    index: int
    sender: int
    receiver: int
    state: HopState = HopState.PENDING
    result: Optional[SendResult] = None

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "sender": self.sender,
            "receiver": self.receiver,
            "state": self.state.value,
            "send_status": self.result.status.value if self.result is not None else None,
        }


@dataclass
class ForwardingReport:
    path: List[int]
    payload: str
    confirmed: bool
    hops: List[HopRecord] = field(default_factory=list)

    @property
    def sends(self) -> int:
        return sum(1 for hop in self.hops if hop.result is not None)

    @property
    def delivered(self) -> bool:
        done = HopState.ACKED if self.confirmed else HopState.SENT
        return all(hop.state is done for hop in self.hops)

    def to_dict(self) -> dict:
        return {
            "path": list(self.path),
            "payload": self.payload,
            "delivered": self.delivered,
            "hops": [hop.to_dict() for hop in self.hops],
        }


class ForwardingController:
    """Relays one message hop by hop along a precomputed path.

    Each hop moves PENDING -> SENT -> ACKED, or to FAILED when the send
    fails or the receiver does not confirm within ``ack_timeout``. With
    ``ack_timeout`` of zero hops are not confirmed and stop at SENT.
    A failed hop does not stop the relay unless ``stop_on_failure`` is set;
    later hops still run from their path positions.
    """

    def __init__(
        self,
        nodes: Mapping[int, NodeActor],
        hop_delay: float = 0.1,
        ack_timeout: float = 1.0,
        stop_on_failure: bool = False,
        logger: logging.Logger | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._nodes = nodes
        self._hop_delay = max(0.0, float(hop_delay))
        self._ack_timeout = max(0.0, float(ack_timeout))
        self._stop_on_failure = bool(stop_on_failure)
        self._log = logger or logging.getLogger("linksim.forwarding")
        self._sleep = sleep

    def relay(self, path: Sequence[int], payload: str) -> ForwardingReport:
        if not path:
            raise InvalidRequestError("cannot relay along an empty path")
        for node_id in path:
            if node_id not in self._nodes:
                raise InvalidRequestError(f"path {list(path)} references unknown node {node_id}")

        report = ForwardingReport(
            path=[int(n) for n in path],
            payload=payload,
            confirmed=self._ack_timeout > 0,
            hops=[HopRecord(index=i, sender=int(path[i]), receiver=int(path[i + 1])) for i in range(len(path) - 1)],
        )
        for hop in report.hops:
            self._run_hop(hop, payload)
            if hop.state is HopState.FAILED and self._stop_on_failure:
                self._log.warning(
                    "relay stopped at hop %s (%s -> %s), path=%s",
                    hop.index,
                    hop.sender,
                    hop.receiver,
                    report.path,
                )
                break
            self._sleep(self._hop_delay)
        return report

    def _run_hop(self, hop: HopRecord, payload: str) -> None:
        result = self._nodes[hop.sender].send(hop.receiver, payload)
        hop.result = result
        if not result.ok or result.message is None:
            hop.state = HopState.FAILED
            self._log.info("hop %s: %s -> %s failed (%s)", hop.index, hop.sender, hop.receiver, result.status.value)
            return
        hop.state = HopState.SENT
        if self._ack_timeout > 0:
            if self._nodes[hop.receiver].wait_for_receipt(result.message, self._ack_timeout):
                hop.state = HopState.ACKED
            else:
                hop.state = HopState.FAILED
        self._log.info("hop %s: %s -> %s %s", hop.index, hop.sender, hop.receiver, hop.state.value)
