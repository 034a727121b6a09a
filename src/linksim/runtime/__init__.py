"""Node actors, relay and network orchestration."""

from linksim.runtime.config import (
    ForwardingConfig,
    MessageSpec,
    NetworkConfig,
    SimulationConfig,
    load_simulation_config,
    parse_simulation_config,
)
from linksim.runtime.forwarding import ForwardingController, ForwardingReport, HopRecord, HopState
from linksim.runtime.network import SimulatedNetwork, run_scenario
from linksim.runtime.node import NodeActor
from linksim.runtime.transport import TcpLineListener, TcpLineTransport

__all__ = [
    "ForwardingConfig",
    "ForwardingController",
    "ForwardingReport",
    "HopRecord",
    "HopState",
    "MessageSpec",
    "NetworkConfig",
    "NodeActor",
    "SimulatedNetwork",
    "SimulationConfig",
    "TcpLineListener",
    "TcpLineTransport",
    "load_simulation_config",
    "parse_simulation_config",
    "run_scenario",
]
