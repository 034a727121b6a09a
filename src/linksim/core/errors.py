from __future__ import annotations


class SetupError(RuntimeError):
    """A node endpoint could not be bound; the network cannot start."""


class InvalidRequestError(ValueError):
    """Malformed or out-of-range node id in a connect/send/stats request."""
