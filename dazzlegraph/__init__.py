"""DazzleGraph - Breadth-first graph search, sync and async.

DazzleGraph explores a directed graph breadth-first and asks a pluggable
strategy, edge by edge, whether the search is done. The same strategies
run under every execution discipline.

Choose your implementation:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Synchronous:
    from dazzlegraph.sync import search_graph

Asynchronous (fan-out by default):
    from dazzlegraph.aio import search_graph_async
━━━━━━━━━━━━━━━━━━━━━━━━━━

Both return the strategy's payload, or NOT_FOUND when the goal is
unreachable. Compare with ``is NOT_FOUND``; payloads may be falsy.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export submodules for convenient access
from . import sync
from . import aio
from ._common import NOT_FOUND, is_found, Graph, example_graph

__all__ = [
    "__version__",
    "sync",
    "aio",
    "NOT_FOUND",
    "is_found",
    "Graph",
    "example_graph",
]
