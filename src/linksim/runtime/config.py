from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from linksim.topology import links_from_config
from linksim.utils.io import load_yaml

MAX_PORT = 65535


@dataclass(frozen=True)
class NetworkConfig:
    node_count: int = 30
    host: str = "127.0.0.1"
    base_port: int = 5000


@dataclass(frozen=True)
class ForwardingConfig:
    hop_delay: float = 0.1
    ack_timeout: float = 1.0
    stop_on_failure: bool = False


@dataclass(frozen=True)
class MessageSpec:
    src: int
    dst: int
    payload: str


@dataclass(frozen=True)
class SimulationConfig:
    network: NetworkConfig = field(default_factory=NetworkConfig)
    forwarding: ForwardingConfig = field(default_factory=ForwardingConfig)
    links: List[Tuple[int, int]] = field(default_factory=list)
    bidirectional: bool = True
    messages: List[MessageSpec] = field(default_factory=list)
    stats_nodes: List[int] = field(default_factory=list)
    settle_time: float = 0.2


def parse_message_spec(raw: str) -> MessageSpec:
    """Parse ``"src-dst-payload"``; the payload may itself contain dashes."""
    parts = str(raw).split("-", 2)
    if len(parts) != 3:
        raise ValueError(f"invalid message {raw!r}: use source-destination-message")
    try:
        src, dst = int(parts[0].strip()), int(parts[1].strip())
    except ValueError as exc:
        raise ValueError(f"invalid message {raw!r}: node ids must be numbers") from exc
    return MessageSpec(src=src, dst=dst, payload=parts[2].strip())


def _parse_message(item: Any) -> MessageSpec:
    if isinstance(item, str):
        return parse_message_spec(item)
    return MessageSpec(src=int(item["src"]), dst=int(item["dst"]), payload=str(item.get("payload", "")))


def parse_simulation_config(raw: Dict[str, Any]) -> SimulationConfig:
    network_raw = dict(raw.get("network", {}) or {})
    forwarding_raw = dict(raw.get("forwarding", {}) or {})
    topology_raw = dict(raw.get("topology", {}) or {})

    network = NetworkConfig(
        node_count=int(network_raw.get("node_count", 30)),
        host=str(network_raw.get("host", "127.0.0.1")),
        base_port=int(network_raw.get("base_port", 5000)),
    )
    forwarding = ForwardingConfig(
        hop_delay=float(forwarding_raw.get("hop_delay", 0.1)),
        ack_timeout=float(forwarding_raw.get("ack_timeout", 1.0)),
        stop_on_failure=bool(forwarding_raw.get("stop_on_failure", False)),
    )
    cfg = SimulationConfig(
        network=network,
        forwarding=forwarding,
        links=links_from_config(topology_raw, network.node_count),
        bidirectional=bool(topology_raw.get("bidirectional", True)),
        messages=[_parse_message(item) for item in raw.get("messages", []) or []],
        stats_nodes=[int(n) for n in raw.get("stats_nodes", []) or []],
        settle_time=float(raw.get("settle_time", 0.2)),
    )
    errors = validate_config(cfg)
    if errors:
        raise ValueError("Invalid config: " + "; ".join(errors))
    return cfg


def load_simulation_config(path: str | Path) -> SimulationConfig:
    return parse_simulation_config(load_yaml(path))


def validate_config(cfg: SimulationConfig) -> List[str]:
    errors: List[str] = []
    n = cfg.network.node_count
    if n < 1:
        errors.append("network.node_count must be >= 1")
    if cfg.network.base_port < 1 or cfg.network.base_port + n > MAX_PORT:
        errors.append(f"network.base_port must leave room for {n} ports below {MAX_PORT + 1}")
    if cfg.forwarding.hop_delay < 0:
        errors.append("forwarding.hop_delay must be >= 0")
    if cfg.forwarding.ack_timeout < 0:
        errors.append("forwarding.ack_timeout must be >= 0")
    if cfg.settle_time < 0:
        errors.append("settle_time must be >= 0")
    for u, v in cfg.links:
        if not (1 <= u <= n and 1 <= v <= n):
            errors.append(f"link {u}-{v}: node ids must be between 1 and {n}")
    for msg in cfg.messages:
        if not (1 <= msg.src <= n and 1 <= msg.dst <= n):
            errors.append(f"message {msg.src}-{msg.dst}: node ids must be between 1 and {n}")
    for node_id in cfg.stats_nodes:
        if not 1 <= node_id <= n:
            errors.append(f"stats node {node_id}: must be between 1 and {n}")
    return errors
