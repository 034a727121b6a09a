from __future__ import annotations

import argparse
import json
import logging
from typing import List, Sequence

from linksim.model.routing import RoutingEngine
from linksim.runtime.config import SimulationConfig, load_simulation_config
from linksim.runtime.network import run_scenario
from linksim.utils.io import dump_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linksim", description="Local multi-node message network simulator")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Start the nodes, relay the configured messages, report stats")
    p_run.add_argument("--config", required=True, help="YAML scenario path.")
    p_run.add_argument("--output", default="", help="Also write the JSON summary to this path.")

    p_routes = sub.add_parser("routes", help="Print topology type, routing table and edges")
    p_routes.add_argument("--config", required=True, help="YAML scenario path.")

    p_validate = sub.add_parser("validate", help="Validate a scenario file")
    p_validate.add_argument("--config", required=True, help="YAML scenario path.")
    return parser


def build_engine(cfg: SimulationConfig) -> RoutingEngine:
    engine = RoutingEngine(cfg.network.node_count)
    for u, v in cfg.links:
        engine.add_edge(u, v)
    engine.compute_routes()
    return engine


def format_routes(engine: RoutingEngine) -> List[str]:
    lines = [f"Detected Topology: {engine.classify_topology().value}"]
    lines.append("----- Routing Table (Next Hop for All Pairs) -----")
    table = engine.routing_table()
    for src in engine.ids.ids():
        hops = [f"To {e.destination} via {e.next_hop}" for e in table if e.source == src]
        lines.append(f"From Node {src}: " + " | ".join(hops))
    lines.append("----- Graph Connections (Edges) -----")
    for u, v in engine.edges():
        lines.append(f"Edge between Node {u} and Node {v}")
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "validate":
        try:
            cfg = load_simulation_config(args.config)
        except (KeyError, TypeError, ValueError) as exc:
            print(json.dumps({"ok": False, "errors": [str(exc)]}, ensure_ascii=False, indent=2))
            return 1
        print(json.dumps({"ok": True, "nodes": cfg.network.node_count, "links": len(cfg.links)}, indent=2))
        return 0

    cfg = load_simulation_config(args.config)
    if args.cmd == "routes":
        for line in format_routes(build_engine(cfg)):
            print(line)
        return 0

    result = run_scenario(cfg)
    if args.output:
        dump_json(args.output, result)
    print(json.dumps(result, indent=2, ensure_ascii=False, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
