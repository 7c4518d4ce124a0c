"""High-level async API for DazzleGraph.

This module provides simple, user-friendly async functions for common
graph searches. Fan-out is the default discipline; pass
``SearchConfig.suspending()`` for the one-lookup-at-a-time baseline.
"""

import asyncio
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .._common.config import SearchConfig
from .._common.errors import ConfigurationError
from .._common.graph import Graph, Node
from .._common.outcome import NOT_FOUND, is_found
from .._common.strategy import SearchStrategy, StrategyKind, resolve_strategy
from .adapters.mapping import AsyncMappingGraphAdapter
from .core.adapter import AsyncGraphAdapter
from .core.searcher import create_async_searcher

GraphSource = Union[Graph, AsyncGraphAdapter, Mapping[Node, Iterable[Node]]]
StrategyChoice = Union[SearchStrategy, StrategyKind, str]


def as_async_adapter(graph: GraphSource, config: Optional[SearchConfig] = None) -> AsyncGraphAdapter:
    """Wrap a Graph or adjacency mapping in an AsyncMappingGraphAdapter.

    Adapters are returned unchanged; otherwise the config's latency and
    max_concurrent are applied to the new adapter.
    """
    if isinstance(graph, AsyncGraphAdapter):
        return graph
    config = config or SearchConfig()
    return AsyncMappingGraphAdapter(graph, latency=config.latency,
                                    max_concurrent=config.max_concurrent)


async def search_graph_async(
    graph: GraphSource,
    start: Node,
    goal: Node,
    strategy: StrategyChoice = StrategyKind.EXISTS,
    config: Optional[SearchConfig] = None
) -> Any:
    """Search asynchronously from start, stopping when strategy succeeds.

    Args:
        graph: Graph, adjacency mapping, or AsyncGraphAdapter
        start: Node to start from
        goal: Node the strategy is looking for
        strategy: Strategy instance or kind ('exists', 'shortest_route')
        config: SearchConfig with mode FAN_OUT (default) or SUSPENDING

    Returns:
        The strategy's payload, or NOT_FOUND

    Raises:
        ConfigurationError: If config is invalid or names a sync mode
        LookupFailedError: If a lookup fails under a fail-fast policy
    """
    config = (config or SearchConfig()).require_valid()

    searcher = create_async_searcher(
        config.mode,
        as_async_adapter(graph, config),
        error_policy=config.error_policy,
    )
    return await searcher.search(start, goal, resolve_strategy(strategy, config.parent_recording))


async def path_exists_async(graph: GraphSource, start: Node, goal: Node,
                            config: Optional[SearchConfig] = None) -> bool:
    """Check asynchronously whether goal is reachable from start."""
    return is_found(await search_graph_async(graph, start, goal, StrategyKind.EXISTS, config))


async def shortest_route_async(graph: GraphSource, start: Node, goal: Node,
                               config: Optional[SearchConfig] = None) -> Optional[List[Node]]:
    """Find a route with the fewest edges asynchronously, or None."""
    route = await search_graph_async(graph, start, goal, StrategyKind.SHORTEST_ROUTE, config)
    return None if route is NOT_FOUND else route


async def parallel_search(
    graph: GraphSource,
    queries: Iterable[Tuple[Node, Node]],
    strategy: Union[StrategyKind, str, Callable[[], SearchStrategy]] = StrategyKind.EXISTS,
    config: Optional[SearchConfig] = None
) -> Dict[Tuple[Node, Node], Any]:
    """Run several searches concurrently over one shared adapter.

    Each query gets its own searcher and a fresh strategy, so stateful
    strategies never see edges from another search. The adapter's
    concurrency limit applies across all of them.

    Args:
        graph: Graph, adjacency mapping, or AsyncGraphAdapter
        queries: (start, goal) pairs
        strategy: Strategy kind, or a zero-argument factory returning a new strategy
        config: SearchConfig shared by all searches

    Returns:
        Dictionary mapping each (start, goal) pair to its outcome
    """
    if isinstance(strategy, SearchStrategy):
        raise ConfigurationError(
            "parallel_search needs a strategy kind or factory; one instance cannot serve concurrent searches"
        )

    config = (config or SearchConfig()).require_valid()
    adapter = as_async_adapter(graph, config)
    queries = list(queries)

    def fresh_strategy() -> SearchStrategy:
        if callable(strategy):
            return strategy()
        return resolve_strategy(strategy, config.parent_recording)

    async def search_one(start: Node, goal: Node) -> Any:
        return await search_graph_async(adapter, start, goal, fresh_strategy(), config)

    tasks = [search_one(start, goal) for start, goal in queries]
    results = await asyncio.gather(*tasks)

    return dict(zip(queries, results))
