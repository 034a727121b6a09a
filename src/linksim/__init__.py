"""Local multi-node message network with shortest-path relay."""

__version__ = "0.1.0"
