"""In-memory graph adapter for async searches.

Backs lookups with a Graph and can simulate a remote store by sleeping
before answering.
"""

import asyncio
from typing import Callable, Iterable, Mapping, Optional, Sequence, Union

from ..._common.graph import Graph, Node
from ..core.adapter import AsyncGraphAdapter

Latency = Union[float, Callable[[Node], float]]


class AsyncMappingGraphAdapter(AsyncGraphAdapter):
    """Async adapter over a Graph or a plain adjacency mapping.

    Without latency the lookup completes on its first step, so fan-out
    completions arrive in the order lookups were issued. With latency
    (seconds, or a per-node callable) completions can overtake each other.
    """

    def __init__(self,
                 graph: Union[Graph, Mapping[Node, Iterable[Node]]],
                 latency: Optional[Latency] = None,
                 max_concurrent: int = 100):
        """Initialize mapping adapter.

        Args:
            graph: Graph or adjacency mapping
            latency: Delay before each lookup answers
            max_concurrent: Maximum concurrent lookups
        """
        super().__init__(max_concurrent=max_concurrent)
        self.graph = graph if isinstance(graph, Graph) else Graph(graph)
        self.latency = latency

    def delay_for(self, node: Node) -> float:
        if self.latency is None:
            return 0.0
        if callable(self.latency):
            return self.latency(node)
        return self.latency

    async def fetch_neighbors(self, node: Node) -> Sequence[Node]:
        delay = self.delay_for(node)
        if delay > 0:
            await asyncio.sleep(delay)
        return await self.graph.neighbors_async(node)

    def __repr__(self) -> str:
        return f"AsyncMappingGraphAdapter({self.graph!r}, latency={self.latency!r})"
