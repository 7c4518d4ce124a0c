"""Graph search strategies for DazzleGraph.

Searchers implement breadth-first exploration over any GraphAdapter,
consulting a SearchStrategy on every discovered edge.
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
from .adapter import GraphAdapter

logger = logging.getLogger(__name__)


class GraphSearcher(ABC):
    """Abstract base class for synchronous graph searchers.

    Subclasses implement ``search``. The base class holds the adapter and
    error policy, and provides root evaluation and policy-guarded lookups
    so every discipline starts and fails the same way.
    """

    def __init__(self, adapter: GraphAdapter, error_policy: Optional[ErrorPolicy] = None):
        """Initialize searcher with an adapter.

        Args:
            adapter: GraphAdapter for reading neighbours
            error_policy: What to do when a lookup raises (default FailFastPolicy)
        """
        self.adapter = adapter
        self.error_policy = error_policy or FailFastPolicy()
        self.stats: Dict[str, int] = {}

    @abstractmethod
    def search(self, start: Node, goal: Node, strategy: SearchStrategy) -> Any:
        """Search from start until strategy reports success.

        Args:
            start: Node to start from
            goal: Node passed to the strategy on every decision
            strategy: Decides per edge whether the search has succeeded

        Returns:
            The strategy's payload, or NOT_FOUND if the reachable graph
            was exhausted

        Raises:
            LookupFailedError: If a lookup fails and the policy gives up
        """
        pass

    def _begin(self, start: Node, goal: Node, strategy: SearchStrategy) -> StrategyResult:
        """Reset strategy state and evaluate the start node itself."""
        self.stats = {'nodes_expanded': 0, 'edges_evaluated': 0}
        strategy.reset()
        return strategy.decide(None, start, goal)

    def _lookup(self, node: Node) -> Sequence[Node]:
        try:
            return self.adapter.get_neighbors(node)
        except Exception as e:
            logger.debug("Lookup failed for %r: %s", node, e)
            return self.error_policy.handle_sync(e, node)


class BreadthFirstSearcher(GraphSearcher):
    """Blocking FIFO breadth-first search.

    One node is fully expanded at a time. Nodes are deduplicated when
    popped, not when enqueued, so a node may sit in the frontier several
    times but is only expanded once.
    """

    def search(self, start: Node, goal: Node, strategy: SearchStrategy) -> Any:
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
            for neighbor in self._lookup(node):
                self.stats['edges_evaluated'] += 1
                decision = strategy.decide(node, neighbor, goal)
                if decision.success:
                    logger.debug("Search %r -> %r resolved at edge %r -> %r", start, goal, node, neighbor)
                    return decision.result
                frontier.append(neighbor)

        logger.debug("Search %r -> %r exhausted after %d nodes", start, goal, len(visited))
        return NOT_FOUND


def create_searcher(mode: SearchMode, adapter: GraphAdapter, **kwargs) -> GraphSearcher:
    """Create a synchronous searcher for a search mode.

    Args:
        mode: SearchMode.SEQUENTIAL or SearchMode.THREADED
        adapter: GraphAdapter for the graph
        **kwargs: Passed to the searcher (error_policy, max_workers)

    Returns:
        GraphSearcher instance

    Raises:
        ConfigurationError: If mode is an async mode
    """
    from .threaded import ThreadedFanOutSearcher

    if mode is SearchMode.SEQUENTIAL:
        kwargs.pop('max_workers', None)
        return BreadthFirstSearcher(adapter, **kwargs)
    if mode is SearchMode.THREADED:
        return ThreadedFanOutSearcher(adapter, **kwargs)

    raise ConfigurationError(
        f"Search mode {mode.value!r} requires dazzlegraph.aio; "
        f"sync supports: {SearchMode.SEQUENTIAL.value}, {SearchMode.THREADED.value}"
    )
