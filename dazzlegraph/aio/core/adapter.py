"""Async graph adapter abstraction.

Defines how to adapt different data sources into the async graph interface.
Key feature: a semaphore caps how many lookups may be in flight at once,
so a fan-out search cannot flood a remote store.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Sequence

from ..._common.graph import Node


class AsyncGraphAdapter(ABC):
    """Abstract base class for async graph adapters.

    Adapters bridge between the generic search logic and a specific
    source of edges. Subclasses implement ``fetch_neighbors``; searchers
    call ``get_neighbors``, which applies the concurrency limit.
    """

    def __init__(self, max_concurrent: int = 100):
        """Initialize adapter with concurrency control.

        Args:
            max_concurrent: Maximum concurrent lookups
        """
        self.max_concurrent = max_concurrent
        self.semaphore = asyncio.Semaphore(max_concurrent)
        self.lookups = 0
        self.in_flight = 0
        self.peak_in_flight = 0

    @abstractmethod
    async def fetch_neighbors(self, node: Node) -> Sequence[Node]:
        """Fetch the outgoing neighbours of a node.

        Must return the same ordering on every call for the same node,
        and an empty sequence for unknown nodes.

        Args:
            node: The node to expand

        Returns:
            Ordered sequence of neighbour nodes
        """
        pass

    async def get_neighbors(self, node: Node) -> Sequence[Node]:
        """Fetch neighbours while holding a concurrency permit."""
        async with self.semaphore:
            self.lookups += 1
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            try:
                return await self.fetch_neighbors(node)
            finally:
                self.in_flight -= 1

    async def get_stats(self) -> dict:
        """Get adapter statistics.

        Returns:
            Dictionary of statistics (lookup count, concurrency)
        """
        return {
            'max_concurrent': self.max_concurrent,
            'lookups': self.lookups,
            'in_flight': self.in_flight,
            'peak_in_flight': self.peak_in_flight,
        }

    async def close(self):
        """Clean up adapter resources.

        Override if adapter needs cleanup (close connections, etc.)
        """
        pass

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
