from __future__ import annotations

import logging
import threading

from linksim.core.errors import SetupError
from linksim.core.types import Endpoint
from linksim.eval.metrics import ReceiptStats, compute_receipt_stats
from linksim.model.messages import Message, SendResult, SendStatus, decode_line, encode_line, now_ms
from linksim.model.state import PeerTable, Receipt, ReceiptLog
from linksim.runtime.transport import TcpLineTransport

ACCEPT_POLL_S = 0.2


class NodeActor:
    """One simulated endpoint: a listener thread plus synchronous sends.

    Peer addresses come from ``peers``; when several actors share one
    PeerTable it is the single source of truth for who can reach whom.
    """

    def __init__(
        self,
        node_id: int,
        endpoint: Endpoint,
        peers: PeerTable | None = None,
        transport: TcpLineTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.node_id = int(node_id)
        self.endpoint = endpoint
        self._peers = peers if peers is not None else PeerTable()
        self._transport = transport or TcpLineTransport()
        self._log = logger or logging.getLogger("linksim.node")
        self._receipts = ReceiptLog()
        try:
            self._listener = self._transport.listen(endpoint)
        except (OSError, OverflowError) as exc:
            raise SetupError(f"node {self.node_id}: cannot bind {endpoint}: {exc}") from exc
        self._thread = threading.Thread(target=self._accept_loop, name=f"node-{self.node_id}", daemon=True)
        self._state_lock = threading.Lock()
        self._stopping = False
        self._log.info("node %s created on %s", self.node_id, endpoint)

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stopping

    def start(self) -> None:
        self._thread.start()

    def connect(self, peer_id: int, endpoint: Endpoint) -> None:
        self._peers.register(self.node_id, peer_id, endpoint)
        self._log.info("node %s connected to node %s at %s", self.node_id, peer_id, endpoint)

    def send(self, peer_id: int, payload: str) -> SendResult:
        endpoint = self._peers.lookup(self.node_id, peer_id)
        if endpoint is None:
            self._log.warning("node %s is not connected to node %s", self.node_id, peer_id)
            return SendResult(status=SendStatus.UNREACHABLE_PEER, sender=self.node_id, peer=int(peer_id))
        message = Message.create(self.node_id, payload)
        self._log.info("node %s sending message to node %s", self.node_id, peer_id)
        try:
            self._transport.send_line(endpoint, encode_line(message))
        except OSError as exc:
            self._log.warning("node %s failed to send to node %s: %s", self.node_id, peer_id, exc)
            return SendResult(
                status=SendStatus.IO_FAILURE,
                sender=self.node_id,
                peer=int(peer_id),
                message=message,
                error=str(exc),
            )
        return SendResult(status=SendStatus.SENT, sender=self.node_id, peer=int(peer_id), message=message)

    def wait_for_receipt(self, message: Message, timeout: float) -> bool:
        return self._receipts.wait_for(message, timeout)

    def receipts(self) -> list[int]:
        return self._receipts.timestamps()

    def receipt_log(self) -> ReceiptLog:
        return self._receipts

    def stats(self) -> ReceiptStats | None:
        return compute_receipt_stats(self._receipts.timestamps())

    def terminate(self, join_timeout: float = 2.0) -> None:
        with self._state_lock:
            if self._stopping:
                return
            self._stopping = True
        self._listener.close()
        if not self._thread.is_alive():
            self._log.info("node %s shutting down", self.node_id)
            return
        if threading.current_thread() is not self._thread:
            self._thread.join(join_timeout)

    def _accept_loop(self) -> None:
        self._log.info("node %s is listening on %s", self.node_id, self.endpoint)
        while not self._stopping:
            try:
                incoming = self._listener.accept_line(ACCEPT_POLL_S)
            except OSError as exc:
                if self._stopping:
                    break
                self._log.error("error in node %s: %s", self.node_id, exc)
                continue
            if incoming is None:
                continue
            self._record(incoming[0])
        self._log.info("node %s shutting down", self.node_id)

    def _record(self, raw: bytes) -> None:
        received_ms = now_ms()
        line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
        message: Message | None
        try:
            message = decode_line(line)
        except ValueError:
            message = None
            self._log.debug("node %s received unframed line: %r", self.node_id, line)
        self._receipts.append(Receipt(received_ms=received_ms, line=line, message=message))
        self._log.info("node %s received at %s: %s", self.node_id, received_ms, line)
