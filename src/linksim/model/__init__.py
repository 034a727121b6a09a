"""Routing and message models."""

from linksim.model.messages import Message, SendResult, SendStatus, decode_line, encode_line
from linksim.model.routing import INF, ForwardingEntry, RoutingEngine, TopologyKind
from linksim.model.state import PeerTable, Receipt, ReceiptLog

__all__ = [
    "INF",
    "ForwardingEntry",
    "Message",
    "PeerTable",
    "Receipt",
    "ReceiptLog",
    "RoutingEngine",
    "SendResult",
    "SendStatus",
    "TopologyKind",
    "decode_line",
    "encode_line",
]
