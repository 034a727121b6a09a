from __future__ import annotations

import logging
import time
from typing import Dict, Iterable, List, Tuple

from linksim.core.errors import SetupError
from linksim.core.ids import NodeIdRange
from linksim.core.types import Endpoint, Path
from linksim.eval.metrics import ReceiptStats
from linksim.model.routing import RoutingEngine, TopologyKind
from linksim.runtime.config import ForwardingConfig, NetworkConfig, SimulationConfig
from linksim.runtime.forwarding import ForwardingController, ForwardingReport
from linksim.runtime.node import NodeActor
from linksim.runtime.transport import TcpLineTransport


class SimulatedNetwork:
    """Fixed set of node actors sharing one routing engine.

    Setup (``connect``/``link``) happens on the caller's thread before
    ``compute_routes``; traffic only flows after routes are computed.
    """

    def __init__(
        self,
        config: NetworkConfig | None = None,
        forwarding: ForwardingConfig | None = None,
        transport: TcpLineTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._cfg = config or NetworkConfig()
        self._fwd_cfg = forwarding or ForwardingConfig()
        self._log = logger or logging.getLogger("linksim.network")
        self._engine = RoutingEngine(self._cfg.node_count)
        self._nodes: Dict[int, NodeActor] = {}
        self._started = False
        self._closed = False
        transport = transport or TcpLineTransport()
        for node_id in self._engine.ids.ids():
            endpoint = Endpoint(self._cfg.host, self._cfg.base_port + node_id)
            try:
                self._nodes[node_id] = NodeActor(node_id, endpoint, peers=self._engine.peers, transport=transport)
            except SetupError as exc:
                self._log.error("error creating node %s: %s", node_id, exc)
                self._release_nodes()
                raise
        self._controller = ForwardingController(
            self._nodes,
            hop_delay=self._fwd_cfg.hop_delay,
            ack_timeout=self._fwd_cfg.ack_timeout,
            stop_on_failure=self._fwd_cfg.stop_on_failure,
        )
        self._log.info("all %s nodes created (base_port=%s)", len(self._nodes), self._cfg.base_port)

    @property
    def ids(self) -> NodeIdRange:
        return self._engine.ids

    @property
    def engine(self) -> RoutingEngine:
        return self._engine

    @property
    def nodes(self) -> Dict[int, NodeActor]:
        return dict(self._nodes)

    def node(self, node_id: int) -> NodeActor:
        return self._nodes[self.ids.validate(node_id)]

    def start(self) -> None:
        if self._started:
            return
        for node in self._nodes.values():
            node.start()
        self._started = True

    def connect(self, src: int, dst: int) -> None:
        """One-way peer registration plus the undirected routing edge."""
        src = self.ids.validate(src)
        dst = self.ids.validate(dst)
        self._engine.connect(src, dst, self._nodes[dst].endpoint)
        self._log.info("node %s connected to node %s", src, dst)

    def link(self, u: int, v: int) -> None:
        self.connect(u, v)
        self.connect(v, u)

    def apply_links(self, links: Iterable[Tuple[int, int]], bidirectional: bool = True) -> None:
        for u, v in links:
            if bidirectional:
                self.link(u, v)
            else:
                self.connect(u, v)

    def compute_routes(self) -> TopologyKind:
        self._engine.compute_routes()
        kind = self._engine.classify_topology()
        self._log.info("detected topology: %s", kind.value)
        return kind

    def shortest_path(self, src: int, dst: int) -> Path:
        return self._engine.get_shortest_path(self.ids.validate(src), self.ids.validate(dst))

    def send_message(self, src: int, dst: int, payload: str) -> ForwardingReport | None:
        if not self._engine.routes_computed:
            raise RuntimeError("routes must be computed before sending traffic")
        path = self.shortest_path(src, dst)
        if not path:
            self._log.warning("no path exists between node %s and node %s", src, dst)
            return None
        self._log.info("shortest path %s -> %s: %s", src, dst, path)
        return self._controller.relay(path, payload)

    def stats(self, node_id: int) -> ReceiptStats | None:
        return self.node(node_id).stats()

    def shutdown(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._log.info("shutting down all nodes")
        self._release_nodes()

    def _release_nodes(self) -> None:
        for node in self._nodes.values():
            node.terminate()

    def __enter__(self) -> "SimulatedNetwork":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


def run_scenario(cfg: SimulationConfig) -> Dict[str, object]:
    """Build the network, apply links, relay every message and collect stats."""
    with SimulatedNetwork(cfg.network, cfg.forwarding) as net:
        net.apply_links(cfg.links, bidirectional=cfg.bidirectional)
        kind = net.compute_routes()
        deliveries: List[Dict[str, object]] = []
        for msg in cfg.messages:
            report = net.send_message(msg.src, msg.dst, msg.payload)
            entry: Dict[str, object] = {"src": msg.src, "dst": msg.dst}
            if report is None:
                entry.update({"path": [], "payload": msg.payload, "delivered": False, "hops": []})
            else:
                entry.update(report.to_dict())
            deliveries.append(entry)
        if cfg.settle_time > 0:
            time.sleep(cfg.settle_time)
        stats: Dict[str, object] = {}
        for node_id in cfg.stats_nodes:
            node_stats = net.stats(node_id)
            stats[str(node_id)] = node_stats.to_dict() if node_stats is not None else None
        return {
            "topology": kind.value,
            "edges": [list(edge) for edge in net.engine.edges()],
            "messages": deliveries,
            "stats": stats,
        }
