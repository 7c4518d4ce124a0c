"""Thread-pool fan-out search.

Lookups run on worker threads, but all traversal state (frontier, visited
set, outstanding count and the strategy) belongs to the calling thread.
Workers only run ``adapter.get_neighbors``; their results come back as
futures and are processed one batch at a time.
"""

import logging
from collections import deque
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Any, Deque, Dict, Optional, Set, Tuple

from ..._common.error_policies import ErrorPolicy
from ..._common.errors import ConfigurationError
from ..._common.graph import Node
from ..._common.outcome import NOT_FOUND
from ..._common.strategy import SearchStrategy
from .adapter import GraphAdapter
from .searcher import GraphSearcher

logger = logging.getLogger(__name__)


class ThreadedFanOutSearcher(GraphSearcher):
    """Breadth-first search with concurrent lookups on a thread pool.

    Every unvisited node popped from the frontier gets its own lookup
    immediately, without waiting for earlier lookups. The search ends
    with NOT_FOUND only when the frontier is empty and no lookup is
    outstanding. A success, or a failure the error policy refuses to
    absorb, ends it at once: lookups that have not started are
    cancelled, running ones are waited for and their results dropped.

    When several lookups finish together they are processed in the order
    they were issued.
    """

    def __init__(self,
                 adapter: GraphAdapter,
                 max_workers: int = 4,
                 error_policy: Optional[ErrorPolicy] = None):
        """Initialize threaded searcher.

        Args:
            adapter: GraphAdapter safe for concurrent calls
            max_workers: Worker threads (and so the lookups in flight)
            error_policy: What to do when a lookup raises
        """
        super().__init__(adapter, error_policy)
        if max_workers <= 0:
            raise ConfigurationError("max_workers must be positive")
        self.max_workers = max_workers

    def search(self, start: Node, goal: Node, strategy: SearchStrategy) -> Any:
        if not self.adapter.supports_concurrency():
            raise ConfigurationError(
                f"{self.adapter.__class__.__name__} does not support concurrent lookups"
            )

        root = self._begin(start, goal, strategy)
        self.stats.update({
            'lookups_issued': 0,
            'lookups_completed': 0,
            'lookups_cancelled': 0,
            'results_discarded': 0,
            'max_in_flight': 0,
            'outstanding': 0,
        })
        if root.success:
            return root.result

        frontier: Deque[Node] = deque([start])
        visited: Set[Node] = set()
        pending: Dict[Future, Tuple[int, Node]] = {}
        issued = 0

        executor = ThreadPoolExecutor(max_workers=self.max_workers,
                                      thread_name_prefix='dazzlegraph')
        try:
            while True:
                while frontier:
                    node = frontier.popleft()
                    if node in visited:
                        continue
                    visited.add(node)

                    pending[executor.submit(self.adapter.get_neighbors, node)] = (issued, node)
                    issued += 1
                    self.stats['lookups_issued'] += 1
                    self.stats['outstanding'] += 1
                    self.stats['max_in_flight'] = max(self.stats['max_in_flight'], len(pending))

                if not pending:
                    logger.debug("Search %r -> %r exhausted after %d nodes", start, goal, len(visited))
                    return NOT_FOUND

                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                for future in sorted(done, key=lambda f: pending[f][0]):
                    _, node = pending.pop(future)
                    self.stats['outstanding'] -= 1
                    self.stats['lookups_completed'] += 1

                    try:
                        neighbors = future.result()
                    except Exception as e:
                        logger.debug("Lookup failed for %r: %s", node, e)
                        neighbors = self.error_policy.handle_sync(e, node)

                    self.stats['nodes_expanded'] += 1
                    for neighbor in neighbors:
                        self.stats['edges_evaluated'] += 1
                        decision = strategy.decide(node, neighbor, goal)
                        if decision.success:
                            logger.debug("Search %r -> %r resolved at edge %r -> %r",
                                         start, goal, node, neighbor)
                            return decision.result
                        frontier.append(neighbor)
        finally:
            for future in pending:
                future.cancel()
            executor.shutdown(wait=True, cancel_futures=True)

            # Whatever was not cancelled has finished by now and its result is dropped
            cancelled = sum(1 for future in pending if future.cancelled())
            self.stats['lookups_cancelled'] += cancelled
            self.stats['results_discarded'] += len(pending) - cancelled
            self.stats['outstanding'] -= len(pending)
            pending.clear()
