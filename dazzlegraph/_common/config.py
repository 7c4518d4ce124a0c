"""Configuration system for DazzleGraph.

This module defines how users choose an execution discipline for a search
and tune the knobs that go with it (concurrency limits, parent recording,
error handling).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Union

from .errors import ConfigurationError


class SearchMode(Enum):
    """How a breadth-first search is executed.

    SEQUENTIAL and THREADED run from synchronous code; SUSPENDING and
    FAN_OUT are coroutines and belong to the aio package.
    """
    SEQUENTIAL = "sequential"   # Blocking loop, one lookup at a time
    SUSPENDING = "suspending"   # Awaited lookups, one at a time
    FAN_OUT = "fan_out"         # Concurrent asyncio lookups
    THREADED = "threaded"       # Concurrent lookups on a thread pool

    @property
    def is_async(self) -> bool:
        return self in (SearchMode.SUSPENDING, SearchMode.FAN_OUT)


class ParentRecording(Enum):
    """When the shortest-route strategy records a node's parent.

    WRITE_ONCE keeps the first discovering edge, which matches BFS levels
    even when lookups complete out of order. OVERWRITE keeps the last
    discovering edge seen before success.
    """
    WRITE_ONCE = "write_once"
    OVERWRITE = "overwrite"


@dataclass
class SearchConfig:
    """Complete configuration for a graph search.

    The high-level APIs in ``dazzlegraph.sync`` and ``dazzlegraph.aio``
    accept one of these and build the matching adapter, strategy and
    searcher from it.
    """

    # Execution discipline
    mode: SearchMode = SearchMode.FAN_OUT

    # Concurrency
    max_concurrent: int = 100                  # Async lookups in flight
    max_workers: int = 4                       # Threads for THREADED mode

    # Strategy behaviour
    parent_recording: ParentRecording = ParentRecording.WRITE_ONCE

    # Error handling (None = FailFastPolicy)
    error_policy: Optional[Any] = None

    # Simulated lookup latency for mapping-backed async adapters
    latency: Optional[Union[float, Callable[[Any], float]]] = None

    @classmethod
    def sequential(cls) -> 'SearchConfig':
        """Create config for the blocking baseline search."""
        return cls(mode=SearchMode.SEQUENTIAL)

    @classmethod
    def suspending(cls) -> 'SearchConfig':
        """Create config for the awaited, one-lookup-at-a-time search."""
        return cls(mode=SearchMode.SUSPENDING)

    @classmethod
    def fan_out(cls, max_concurrent: int = 100) -> 'SearchConfig':
        """Create config for concurrent asyncio lookups.

        Args:
            max_concurrent: Maximum lookups in flight at once

        Returns:
            SearchConfig for fan-out search
        """
        return cls(mode=SearchMode.FAN_OUT, max_concurrent=max_concurrent)

    @classmethod
    def threaded(cls, max_workers: int = 4) -> 'SearchConfig':
        """Create config for concurrent lookups on a thread pool.

        Args:
            max_workers: Number of worker threads

        Returns:
            SearchConfig for threaded fan-out search
        """
        return cls(mode=SearchMode.THREADED, max_workers=max_workers)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.mode, SearchMode):
            errors.append(f"mode must be a SearchMode, got {self.mode!r}")

        if not isinstance(self.parent_recording, ParentRecording):
            errors.append(
                f"parent_recording must be a ParentRecording, got {self.parent_recording!r}"
            )

        if self.max_concurrent <= 0:
            errors.append("max_concurrent must be positive")

        if self.max_workers <= 0:
            errors.append("max_workers must be positive")

        if self.latency is not None and not callable(self.latency) and self.latency < 0:
            errors.append("latency cannot be negative")

        if self.error_policy is not None and not hasattr(self.error_policy, 'handle_sync'):
            errors.append("error_policy must be an ErrorPolicy instance")

        return errors

    def require_valid(self) -> 'SearchConfig':
        """Raise ConfigurationError listing every problem, else return self."""
        errors = self.validate()
        if errors:
            raise ConfigurationError("Invalid search configuration: " + "; ".join(errors))
        return self
