from __future__ import annotations

from pathlib import Path

import pytest

from linksim.runtime.config import MessageSpec, load_simulation_config, parse_message_spec, parse_simulation_config


def test_load_simulation_config_parses_sections(tmp_path: Path) -> None:
    cfg_path = tmp_path / "scenario.yaml"
    cfg_path.write_text(
        """
network:
  node_count: 5
  base_port: 7000
forwarding:
  hop_delay: 0.0
  ack_timeout: 0.25
  stop_on_failure: false
topology:
  type: ring
  links: ["1-3"]
  bidirectional: false
messages:
  - "1-4-hi - there"
  - {src: 2, dst: 5, payload: yo}
stats_nodes: [4]
""".strip(),
        encoding="utf-8",
    )
    cfg = load_simulation_config(cfg_path)

    assert cfg.network.node_count == 5
    assert cfg.network.base_port == 7000
    assert cfg.network.host == "127.0.0.1"
    assert cfg.forwarding.ack_timeout == 0.25
    assert cfg.forwarding.stop_on_failure is False
    assert cfg.links == [(1, 2), (2, 3), (3, 4), (4, 5), (5, 1), (1, 3)]
    assert cfg.bidirectional is False
    assert cfg.messages == [MessageSpec(1, 4, "hi - there"), MessageSpec(2, 5, "yo")]
    assert cfg.stats_nodes == [4]


def test_defaults_match_thirty_node_network() -> None:
    cfg = parse_simulation_config({})
    assert cfg.network.node_count == 30
    assert cfg.forwarding.hop_delay == 0.1
    assert cfg.links == []
    assert cfg.bidirectional is True


@pytest.mark.parametrize(
    "raw",
    [
        {"network": {"node_count": 0}},
        {"network": {"node_count": 30, "base_port": 65530}},
        {"network": {"node_count": 4}, "topology": {"links": ["1-5"]}},
        {"network": {"node_count": 4}, "messages": ["0-2-x"]},
        {"network": {"node_count": 4}, "stats_nodes": [9]},
        {"forwarding": {"hop_delay": -1}},
    ],
)
def test_invalid_configs_are_rejected(raw: dict) -> None:
    with pytest.raises(ValueError):
        parse_simulation_config(raw)


def test_parse_message_spec() -> None:
    assert parse_message_spec("3-9- spaced out ") == MessageSpec(3, 9, "spaced out")
    with pytest.raises(ValueError):
        parse_message_spec("3-9")
    with pytest.raises(ValueError):
        parse_message_spec("x-9-hi")
