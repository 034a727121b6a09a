from __future__ import annotations

import json
from pathlib import Path

from linksim.cli.main import main


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "scenario.yaml"
    path.write_text(text.strip(), encoding="utf-8")
    return path


def test_routes_prints_table_and_edges(tmp_path: Path, capsys) -> None:
    path = _write(
        tmp_path,
        """
network:
  node_count: 4
topology:
  type: star
  center: 1
""",
    )
    assert main(["routes", "--config", str(path)]) == 0
    out = capsys.readouterr().out.splitlines()

    assert out[0] == "Detected Topology: Star"
    assert "From Node 2: To 1 via 1 | To 3 via 1 | To 4 via 1" in out
    assert "Edge between Node 1 and Node 4" in out


def test_validate_reports_errors(tmp_path: Path, capsys) -> None:
    path = _write(tmp_path, "network:\n  node_count: 3\ntopology:\n  links: ['1-7']\n")
    assert main(["validate", "--config", str(path)]) == 1
    result = json.loads(capsys.readouterr().out)
    assert result["ok"] is False
    assert "1-7" in result["errors"][0]


def test_validate_accepts_good_file(tmp_path: Path, capsys) -> None:
    path = _write(tmp_path, "network:\n  node_count: 3\ntopology:\n  type: line\n")
    assert main(["validate", "--config", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == {"ok": True, "nodes": 3, "links": 2}
