"""Synchronous implementation of DazzleGraph.

This package contains the blocking breadth-first searcher and a
thread-pool fan-out searcher. Both run to completion before returning.
"""

# Core components
from .core.adapter import GraphAdapter
from .core.searcher import (
    GraphSearcher,
    BreadthFirstSearcher,
    create_searcher,
)
from .core.threaded import ThreadedFanOutSearcher

# Adapters
from .adapters.mapping import MappingGraphAdapter

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
    as_adapter,
    search_graph,
    path_exists,
    shortest_route,
)

__all__ = [
    # Core
    'GraphAdapter',
    'GraphSearcher',
    'BreadthFirstSearcher',
    'ThreadedFanOutSearcher',
    'create_searcher',
    # Adapters
    'MappingGraphAdapter',
    # Graph and outcomes
    'Graph',
    'example_graph',
    'NOT_FOUND',
    'is_found',
    'LookupFailedError',
    'ConfigurationError',
    # Config
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
    # API
    'as_adapter',
    'search_graph',
    'path_exists',
    'shortest_route',
]
