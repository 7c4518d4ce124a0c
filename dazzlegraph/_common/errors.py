"""Exceptions raised by DazzleGraph."""

from typing import Any


class LookupFailedError(Exception):
    """A neighbour lookup failed and the error policy chose to stop.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, node: Any, message: str = None):
        self.node = node
        super().__init__(message or f"Neighbour lookup failed for node {node!r}")


class ConfigurationError(ValueError):
    """Invalid search configuration or unknown strategy name."""
