"""Test fixtures for DazzleGraph consumers.

These fixtures make concurrency behaviour observable: adapters whose
lookups finish in a scripted order or fail on chosen nodes, and a
strategy wrapper that records every decision it is asked to make.
"""

import asyncio
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .._common.graph import Graph, Node
from .._common.strategy import SearchStrategy, StrategyResult
from ..aio.adapters.mapping import AsyncMappingGraphAdapter
from ..sync.adapters.mapping import MappingGraphAdapter


class ScriptedLatencyAdapter(AsyncMappingGraphAdapter):
    """Async adapter with per-node delays and failures.

    Example:
        adapter = ScriptedLatencyAdapter(graph, delays={'B': 0.05})
        # C's lookup now completes before B's even though B was issued first

    Attributes:
        started: Nodes in the order their lookups began
        completed: Nodes in the order their lookups finished (including failures)
        cancelled: Nodes whose lookups were cancelled before finishing
    """

    def __init__(self,
                 graph: Union[Graph, Mapping[Node, Iterable[Node]]],
                 delays: Optional[Dict[Node, float]] = None,
                 failures: Optional[Dict[Node, Exception]] = None,
                 max_concurrent: int = 100):
        self.delays = dict(delays or {})
        self.failures = dict(failures or {})
        super().__init__(graph, latency=lambda node: self.delays.get(node, 0.0),
                         max_concurrent=max_concurrent)
        self.started: List[Node] = []
        self.completed: List[Node] = []
        self.cancelled: List[Node] = []

    async def fetch_neighbors(self, node: Node) -> Sequence[Node]:
        self.started.append(node)
        try:
            delay = self.delay_for(node)
            if delay > 0:
                await asyncio.sleep(delay)
            else:
                # Yield once so issue order, not call order, decides completion order
                await asyncio.sleep(0)
        except asyncio.CancelledError:
            self.cancelled.append(node)
            raise

        self.completed.append(node)
        if node in self.failures:
            raise self.failures[node]
        return self.graph.neighbors(node)


class FlakyGraphAdapter(MappingGraphAdapter):
    """Sync adapter that raises a chosen exception for chosen nodes."""

    def __init__(self,
                 graph: Union[Graph, Mapping[Node, Iterable[Node]]],
                 failures: Optional[Dict[Node, Exception]] = None):
        super().__init__(graph)
        self.failures = dict(failures or {})

    def get_neighbors(self, node: Node) -> Sequence[Node]:
        if node in self.failures:
            raise self.failures[node]
        return super().get_neighbors(node)


class RecordingStrategy(SearchStrategy):
    """Wrap a strategy and record every decision made through it.

    ``calls`` holds (parent, candidate, success) tuples in call order.
    ``overlapped`` becomes True if decide() is ever entered while another
    call is still running, which would mean a searcher failed to
    serialize its decisions.
    """

    def __init__(self, inner: SearchStrategy):
        self.inner = inner
        self.calls: List[Tuple[Optional[Node], Node, bool]] = []
        self.resets = 0
        self.overlapped = False
        self._active = 0
        self._lock = threading.Lock()

    def reset(self) -> None:
        self.resets += 1
        self.calls.clear()
        self.inner.reset()

    def decide(self, parent: Optional[Node], candidate: Node, goal: Node) -> StrategyResult[Any]:
        with self._lock:
            self._active += 1
            if self._active > 1:
                self.overlapped = True
        try:
            result = self.inner.decide(parent, candidate, goal)
        finally:
            with self._lock:
                self._active -= 1
        self.calls.append((parent, candidate, result.success))
        return result

    @property
    def edges(self) -> List[Tuple[Optional[Node], Node]]:
        """Evaluated (parent, candidate) pairs without the outcome flag."""
        return [(parent, candidate) for parent, candidate, _ in self.calls]
