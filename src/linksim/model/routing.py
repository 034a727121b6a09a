from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from linksim.core.ids import NodeIdRange
from linksim.core.types import Endpoint, Path
from linksim.model.state import PeerTable

INF = float("inf")


class TopologyKind(str, Enum):
    BUS = "Bus"
    RING = "Ring"
    STAR = "Star"
    MESH = "Mesh"
    CUSTOM = "Custom/Hybrid"


@dataclass(frozen=True)
class ForwardingEntry:
    source: int
    destination: int
    next_hop: int
    metric: int


class RoutingEngine:
    """All-pairs shortest-path routing over unit-cost undirected links.

    Topology is written by a single caller during setup. ``compute_routes``
    runs once and freezes the engine; afterwards every reader sees the same
    immutable distance and next-hop matrices.
    """

    def __init__(self, node_count: int, logger: logging.Logger | None = None) -> None:
        self._ids = NodeIdRange(node_count)
        self._log = logger or logging.getLogger("linksim.routing")
        n = len(self._ids)
        self._dist: List[List[float]] = [[0 if i == j else INF for j in range(n)] for i in range(n)]
        self._next: List[List[Optional[int]]] = [[None] * n for _ in range(n)]
        self._adjacent: List[List[bool]] = [[False] * n for _ in range(n)]
        self._peers = PeerTable()
        self._computed = False

    @property
    def ids(self) -> NodeIdRange:
        return self._ids

    @property
    def node_count(self) -> int:
        return len(self._ids)

    @property
    def peers(self) -> PeerTable:
        return self._peers

    @property
    def routes_computed(self) -> bool:
        return self._computed

    def add_edge(self, u: int, v: int) -> None:
        self._ensure_mutable()
        i = self._ids.index(u)
        j = self._ids.index(v)
        if i == j:
            # Self loops carry no route; the diagonal stays at zero.
            return
        self._dist[i][j] = 1
        self._dist[j][i] = 1
        self._next[i][j] = int(v)
        self._next[j][i] = int(u)
        self._adjacent[i][j] = True
        self._adjacent[j][i] = True

    def connect(self, src: int, dst: int, endpoint: Endpoint) -> None:
        """Register ``src -> dst`` in the peer table and add the routing edge."""
        self._ensure_mutable()
        self._ids.validate(src)
        self._ids.validate(dst)
        self._peers.register(src, dst, endpoint)
        self.add_edge(src, dst)

    def compute_routes(self) -> None:
        if self._computed:
            self._log.debug("routes already computed, skipping")
            return
        n = self.node_count
        dist = self._dist
        nxt = self._next
        for k in range(n):
            dist_k = dist[k]
            for i in range(n):
                dist_ik = dist[i][k]
                if dist_ik == INF:
                    continue
                dist_i = dist[i]
                nxt_i = nxt[i]
                for j in range(n):
                    candidate = dist_ik + dist_k[j]
                    if candidate < dist_i[j]:
                        dist_i[j] = candidate
                        nxt_i[j] = nxt_i[k]
        self._computed = True
        reachable = sum(1 for i in range(n) for j in range(n) if i != j and dist[i][j] != INF)
        self._log.info("routes computed: nodes=%s edges=%s reachable_pairs=%s", n, len(self.edges()), reachable)

    def distance(self, u: int, v: int) -> int | None:
        d = self._dist[self._ids.index(u)][self._ids.index(v)]
        if d == INF:
            return None
        return int(d)

    def next_hop(self, u: int, v: int) -> int | None:
        return self._next[self._ids.index(u)][self._ids.index(v)]

    def get_shortest_path(self, u: int, v: int) -> Path:
        if self.distance(u, v) is None:
            return []
        target = int(v)
        current = int(u)
        path: Path = [current]
        while current != target:
            hop = self.next_hop(current, target)
            if hop is None:
                return []
            current = hop
            path.append(current)
        return path

    def degrees(self) -> List[int]:
        return [sum(1 for linked in row if linked) for row in self._adjacent]

    def classify_topology(self) -> TopologyKind:
        """Label the topology from its degree sequence.

        This is a heuristic, not an isomorphism check: any graph that shares
        a degree sequence with a canonical shape gets that shape's label.
        """
        n = self.node_count
        degrees = self.degrees()
        counts = Counter(degrees)
        if counts[1] == 2 and counts[2] == n - 2:
            return TopologyKind.BUS
        if counts[2] == n:
            return TopologyKind.RING
        if counts[n - 1] == 1 and counts[1] == n - 1:
            return TopologyKind.STAR
        if counts[n - 1] == n:
            return TopologyKind.MESH
        return TopologyKind.CUSTOM

    def edges(self) -> List[Tuple[int, int]]:
        n = self.node_count
        return [(i + 1, j + 1) for i in range(n) for j in range(i + 1, n) if self._adjacent[i][j]]

    def routing_table(self) -> List[ForwardingEntry]:
        entries: List[ForwardingEntry] = []
        for src in self._ids.ids():
            for dst in self._ids.ids():
                if src == dst:
                    continue
                hop = self.next_hop(src, dst)
                metric = self.distance(src, dst)
                if hop is None or metric is None:
                    continue
                entries.append(ForwardingEntry(source=src, destination=dst, next_hop=hop, metric=metric))
        return entries

    def distance_matrix(self) -> List[List[int | None]]:
        return [[None if d == INF else int(d) for d in row] for row in self._dist]

    def _ensure_mutable(self) -> None:
        if self._computed:
            raise RuntimeError("topology is frozen after compute_routes()")
