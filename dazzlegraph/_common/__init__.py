"""Common components shared between sync and aio implementations.

This internal package contains non-I/O code that is identical between
both implementations. It should NOT be imported directly by users.

Components here include:
- The Graph store and the reference example graph
- Search strategies and their result type
- Configuration, outcome sentinel, exceptions and error policies

Important: This package must NEVER import from sync or aio to avoid
circular dependencies.
"""

from .graph import Graph, Node, EXAMPLE_ADJACENCY, example_graph
from .outcome import NOT_FOUND, is_found
from .errors import LookupFailedError, ConfigurationError
from .config import SearchConfig, SearchMode, ParentRecording
from .strategy import (
    StrategyResult,
    SearchStrategy,
    PathExistsStrategy,
    ShortestRouteStrategy,
    StrategyKind,
    create_strategy,
    resolve_strategy,
)
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)

__all__ = [
    'Graph',
    'Node',
    'EXAMPLE_ADJACENCY',
    'example_graph',
    'NOT_FOUND',
    'is_found',
    'LookupFailedError',
    'ConfigurationError',
    'SearchConfig',
    'SearchMode',
    'ParentRecording',
    'StrategyResult',
    'SearchStrategy',
    'PathExistsStrategy',
    'ShortestRouteStrategy',
    'StrategyKind',
    'create_strategy',
    'resolve_strategy',
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'ThresholdPolicy',
]
