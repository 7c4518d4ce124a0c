"""Async graph search strategies.

Implements breadth-first search using async/await. The suspending
searcher awaits one lookup at a time; see fanout.py for the concurrent
variant.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Deque, Dict, Optional, Sequence, Set

from ..._common.config import SearchMode
from ..._common.error_policies import ErrorPolicy, FailFastPolicy
from ..._common.errors import ConfigurationError
from ..._common.graph import Node
from ..._common.outcome import NOT_FOUND
from ..._common.strategy import SearchStrategy, StrategyResult
from .adapter import AsyncGraphAdapter

logger = logging.getLogger(__name__)


class AsyncGraphSearcher(ABC):
    """Abstract base class for async graph searchers.

    Holds the adapter and error policy, and gives every subclass the same
    start-of-search handling: reset the strategy, then let it judge the
    start node before any edge is fetched.
    """

    def __init__(self, adapter: AsyncGraphAdapter, error_policy: Optional[ErrorPolicy] = None):
        """Initialize searcher.

        Args:
            adapter: Async adapter for reading neighbours
            error_policy: What to do when a lookup raises (default FailFastPolicy)
        """
        self.adapter = adapter
        self.error_policy = error_policy or FailFastPolicy()
        self.stats: Dict[str, int] = {}

    @abstractmethod
    async def search(self, start: Node, goal: Node, strategy: SearchStrategy) -> Any:
        """Search from start until strategy reports success.

        Args:
            start: Node to start from
            goal: Node passed to the strategy on every decision
            strategy: Decides per edge whether the search has succeeded

        Returns:
            The strategy's payload, or NOT_FOUND

        Raises:
            LookupFailedError: If a lookup fails and the policy gives up
        """
        pass

    def _begin(self, start: Node, goal: Node, strategy: SearchStrategy) -> StrategyResult:
        self.stats = {'nodes_expanded': 0, 'edges_evaluated': 0}
        strategy.reset()
        return strategy.decide(None, start, goal)


class AsyncBreadthFirstSearcher(AsyncGraphSearcher):
    """Async breadth-first search with one lookup in flight.

    Control flow and edge order are identical to the synchronous
    BreadthFirstSearcher; the only difference is that each lookup
    suspends this coroutine while it runs.
    """

    async def search(self, start: Node, goal: Node, strategy: SearchStrategy) -> Any:
        root = self._begin(start, goal, strategy)
        if root.success:
            return root.result

        frontier: Deque[Node] = deque([start])
        visited: Set[Node] = set()

        while frontier:
            node = frontier.popleft()
            if node in visited:
                continue
            visited.add(node)

            self.stats['nodes_expanded'] += 1
            for neighbor in await self._lookup(node):
                self.stats['edges_evaluated'] += 1
                decision = strategy.decide(node, neighbor, goal)
                if decision.success:
                    logger.debug("Search %r -> %r resolved at edge %r -> %r", start, goal, node, neighbor)
                    return decision.result
                frontier.append(neighbor)

        logger.debug("Search %r -> %r exhausted after %d nodes", start, goal, len(visited))
        return NOT_FOUND

    async def _lookup(self, node: Node) -> Sequence[Node]:
        try:
            return await self.adapter.get_neighbors(node)
        except Exception as e:
            logger.debug("Lookup failed for %r: %s", node, e)
            return await self.error_policy.handle(e, node)


def create_async_searcher(mode: SearchMode, adapter: AsyncGraphAdapter, **kwargs) -> AsyncGraphSearcher:
    """Create an async searcher for a search mode.

    Args:
        mode: SearchMode.SUSPENDING or SearchMode.FAN_OUT
        adapter: Async adapter for the graph
        **kwargs: Passed to the searcher (error_policy)

    Returns:
        AsyncGraphSearcher instance

    Raises:
        ConfigurationError: If mode is a synchronous mode
    """
    from .fanout import AsyncFanOutSearcher

    if mode is SearchMode.SUSPENDING:
        return AsyncBreadthFirstSearcher(adapter, **kwargs)
    if mode is SearchMode.FAN_OUT:
        return AsyncFanOutSearcher(adapter, **kwargs)

    raise ConfigurationError(
        f"Search mode {mode.value!r} requires dazzlegraph.sync; "
        f"aio supports: {SearchMode.SUSPENDING.value}, {SearchMode.FAN_OUT.value}"
    )
