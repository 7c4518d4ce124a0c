"""Asynchronous implementation of DazzleGraph.

This package contains native async/await searchers: a suspending
breadth-first search that awaits one lookup at a time, and a fan-out
search that keeps many lookups in flight while resolving exactly once.
"""

# Core abstractions
from .core import (
    AsyncGraphAdapter,
    AsyncGraphSearcher,
    AsyncBreadthFirstSearcher,
    AsyncFanOutSearcher,
    create_async_searcher,
)

# Adapters
from .adapters import AsyncMappingGraphAdapter

# Shared components
from .._common import (
    Graph,
    example_graph,
    NOT_FOUND,
    is_found,
    LookupFailedError,
    ConfigurationError,
    SearchConfig,
    SearchMode,
    ParentRecording,
    StrategyResult,
    SearchStrategy,
    PathExistsStrategy,
    ShortestRouteStrategy,
    StrategyKind,
    create_strategy,
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)

# High-level API
from .api import (
    as_async_adapter,
    search_graph_async,
    path_exists_async,
    shortest_route_async,
    parallel_search,
)

__all__ = [
    # Core abstractions
    'AsyncGraphAdapter',
    'AsyncGraphSearcher',
    'AsyncBreadthFirstSearcher',
    'AsyncFanOutSearcher',
    'create_async_searcher',
    # Adapters
    'AsyncMappingGraphAdapter',
    # Graph and outcomes
    'Graph',
    'example_graph',
    'NOT_FOUND',
    'is_found',
    'LookupFailedError',
    'ConfigurationError',
    # Configuration
    'SearchConfig',
    'SearchMode',
    'ParentRecording',
    # Strategies
    'StrategyResult',
    'SearchStrategy',
    'PathExistsStrategy',
    'ShortestRouteStrategy',
    'StrategyKind',
    'create_strategy',
    # Error policies
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'ThresholdPolicy',
    # High-level API
    'as_async_adapter',
    'search_graph_async',
    'path_exists_async',
    'shortest_route_async',
    'parallel_search',
]
