"""High-level synchronous API for DazzleGraph.

This module provides simple, user-friendly functions for the common
searches. They build the adapter, strategy and searcher from a
SearchConfig so callers only deal with nodes and answers.
"""

from typing import Any, Iterable, List, Mapping, Optional, Union

from .._common.config import SearchConfig
from .._common.graph import Graph, Node
from .._common.outcome import NOT_FOUND, is_found
from .._common.strategy import SearchStrategy, StrategyKind, resolve_strategy
from .adapters.mapping import MappingGraphAdapter
from .core.adapter import GraphAdapter
from .core.searcher import create_searcher

GraphSource = Union[Graph, GraphAdapter, Mapping[Node, Iterable[Node]]]


def as_adapter(graph: GraphSource) -> GraphAdapter:
    """Wrap a Graph or adjacency mapping in a MappingGraphAdapter.

    Adapters are returned unchanged.
    """
    if isinstance(graph, GraphAdapter):
        return graph
    return MappingGraphAdapter(graph)


def search_graph(
    graph: GraphSource,
    start: Node,
    goal: Node,
    strategy: Union[SearchStrategy, StrategyKind, str] = StrategyKind.EXISTS,
    config: Optional[SearchConfig] = None
) -> Any:
    """Breadth-first search from start, stopping when strategy succeeds.

    Args:
        graph: Graph, adjacency mapping, or GraphAdapter
        start: Node to start from
        goal: Node the strategy is looking for
        strategy: Strategy instance or kind ('exists', 'shortest_route')
        config: SearchConfig with mode SEQUENTIAL (default) or THREADED

    Returns:
        The strategy's payload, or NOT_FOUND

    Raises:
        ConfigurationError: If config is invalid or names an async mode
        LookupFailedError: If a lookup fails under a fail-fast policy

    Example:
        >>> search_graph(example_graph(), 'A', 'H', 'shortest_route')
        ['A', 'B', 'D', 'H']
    """
    config = (config or SearchConfig.sequential()).require_valid()

    searcher = create_searcher(
        config.mode,
        as_adapter(graph),
        error_policy=config.error_policy,
        max_workers=config.max_workers,
    )
    return searcher.search(start, goal, resolve_strategy(strategy, config.parent_recording))


def path_exists(graph: GraphSource, start: Node, goal: Node,
                config: Optional[SearchConfig] = None) -> bool:
    """Check whether goal is reachable from start."""
    return is_found(search_graph(graph, start, goal, StrategyKind.EXISTS, config))


def shortest_route(graph: GraphSource, start: Node, goal: Node,
                   config: Optional[SearchConfig] = None) -> Optional[List[Node]]:
    """Find a route with the fewest edges, or None if there is none.

    Among equally short routes, the one discovered first in neighbour
    order is returned.
    """
    route = search_graph(graph, start, goal, StrategyKind.SHORTEST_ROUTE, config)
    return None if route is NOT_FOUND else route
