"""Core abstractions for async graph search.

This module defines the async adapter interface and the searchers built
on it. All components use async/await for non-blocking lookups.
"""

from .adapter import AsyncGraphAdapter
from .searcher import (
    AsyncGraphSearcher,
    AsyncBreadthFirstSearcher,
    create_async_searcher,
)
from .fanout import AsyncFanOutSearcher

__all__ = [
    # Adapter
    'AsyncGraphAdapter',
    # Searchers
    'AsyncGraphSearcher',
    'AsyncBreadthFirstSearcher',
    'AsyncFanOutSearcher',
    'create_async_searcher',
]
