from __future__ import annotations

import pytest

from linksim.model.routing import RoutingEngine, TopologyKind
from linksim.topology import fullmesh, line, links_from_config, parse_link_spec, ring, star


def _classify(n: int, links: list[tuple[int, int]]) -> TopologyKind:
    engine = RoutingEngine(n)
    for u, v in links:
        engine.add_edge(u, v)
    return engine.classify_topology()


def test_ring_of_thirty() -> None:
    links = [(i, i % 30 + 1) for i in range(1, 31)]
    assert _classify(30, links) is TopologyKind.RING


def test_star_of_thirty() -> None:
    links = [(1, i) for i in range(2, 31)]
    assert _classify(30, links) is TopologyKind.STAR


def test_mesh_of_thirty() -> None:
    assert _classify(30, fullmesh(30)) is TopologyKind.MESH


def test_bus_of_thirty() -> None:
    assert _classify(30, line(30)) is TopologyKind.BUS


def test_partial_graph_is_custom() -> None:
    assert _classify(30, [(1, 2), (2, 3)]) is TopologyKind.CUSTOM
    assert _classify(30, []) is TopologyKind.CUSTOM


def test_classification_only_looks_at_degrees() -> None:
    # Two disjoint 15-cycles share the ring's degree sequence.
    links = [(i, i % 15 + 1) for i in range(1, 16)]
    links += [(i, (i - 15) % 15 + 16) for i in range(16, 31)]
    assert _classify(30, links) is TopologyKind.RING


def test_generators_cover_expected_links() -> None:
    assert line(4) == [(1, 2), (2, 3), (3, 4)]
    assert ring(4) == [(1, 2), (2, 3), (3, 4), (4, 1)]
    assert star(4, center=2) == [(2, 1), (2, 3), (2, 4)]
    assert len(fullmesh(5)) == 10
    assert ring(2) == [(1, 2)]


def test_links_from_config_combines_shape_and_explicit_links() -> None:
    links = links_from_config({"type": "line", "links": ["3-1", [4, 2], {"src": 1, "dst": 4}]}, 4)
    assert links == [(1, 2), (2, 3), (3, 4), (3, 1), (4, 2), (1, 4)]
    with pytest.raises(ValueError):
        links_from_config({"type": "torus"}, 4)


@pytest.mark.parametrize("raw", ["1", "1-2-3", "a-b", ""])
def test_parse_link_spec_rejects_malformed_input(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_link_spec(raw)


def test_parse_link_spec_trims_whitespace() -> None:
    assert parse_link_spec(" 3 - 17 ") == (3, 17)
