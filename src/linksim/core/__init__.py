"""Identifiers, shared types and errors."""

from linksim.core.errors import InvalidRequestError, SetupError
from linksim.core.ids import NodeIdRange
from linksim.core.types import Endpoint, NodeId, Path

__all__ = [
    "Endpoint",
    "InvalidRequestError",
    "NodeId",
    "NodeIdRange",
    "Path",
    "SetupError",
]
