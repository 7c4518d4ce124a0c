"""Core abstractions for synchronous graph search.

This module contains the adapter interface and the searchers that walk it.
"""

from .adapter import GraphAdapter
from .searcher import GraphSearcher, BreadthFirstSearcher, create_searcher
from .threaded import ThreadedFanOutSearcher

__all__ = [
    "GraphAdapter",
    "GraphSearcher",
    "BreadthFirstSearcher",
    "ThreadedFanOutSearcher",
    "create_searcher",
]
