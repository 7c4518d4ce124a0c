"""Concurrent fan-out breadth-first search.

Every unvisited frontier node gets its own lookup task as soon as it is
popped, so lookups for many nodes are in flight together. The tasks do
nothing but fetch: each posts a completion message to a queue and
exits. One drive loop owns the frontier, the visited set, the
outstanding count and every strategy call, and consumes completions one
at a time. A node's whole batch of edge decisions therefore runs before
the next completion is looked at.

The drive loop resolves exactly once:
- with a payload, the first time the strategy succeeds;
- with NOT_FOUND, when the frontier is empty and no lookup is
  outstanding (never while a lookup might still add nodes);
- with LookupFailedError, when the error policy refuses a failure.

On resolution all remaining lookups are cancelled and awaited, and any
results they already posted are discarded. The outstanding count is
settled for each of them, so it is always back to 0 when search()
returns or raises.
"""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Optional, Sequence, Set

from ..._common.graph import Node
from ..._common.outcome import NOT_FOUND
from ..._common.strategy import SearchStrategy
from .searcher import AsyncGraphSearcher

logger = logging.getLogger(__name__)


@dataclass
class _Completion:
    """Message posted by a finished lookup."""
    node: Node
    neighbors: Sequence[Node]
    error: Optional[Exception] = None


class _FanOutRun:
    """Traversal state of one fan-out search. Only the drive loop touches it."""

    def __init__(self, start: Node):
        self.frontier: Deque[Node] = deque([start])
        self.visited: Set[Node] = set()
        self.outstanding = 0
        self.tasks: Set[asyncio.Task] = set()
        self.completions: asyncio.Queue = asyncio.Queue()


class AsyncFanOutSearcher(AsyncGraphSearcher):
    """Async breadth-first search with concurrent lookups.

    The adapter's semaphore bounds how many lookups actually run at once;
    the rest wait for a permit but still count as outstanding.

    With lookups that complete in the order they were issued (for
    example AsyncMappingGraphAdapter without latency) the strategy sees
    exactly the same edge sequence as the sequential searchers.
    """

    async def search(self, start: Node, goal: Node, strategy: SearchStrategy) -> Any:
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

        run = _FanOutRun(start)
        try:
            return await self._drive(run, start, goal, strategy)
        finally:
            await self._settle_pending(run)

    async def _drive(self, run: _FanOutRun, start: Node, goal: Node, strategy: SearchStrategy) -> Any:
        while True:
            self._issue_frontier(run)

            # Frontier is empty here; only in-flight lookups can add to it
            if run.outstanding == 0:
                logger.debug("Search %r -> %r exhausted after %d nodes", start, goal, len(run.visited))
                return NOT_FOUND

            completion = await run.completions.get()
            run.outstanding -= 1
            self.stats['outstanding'] = run.outstanding
            self.stats['lookups_completed'] += 1

            neighbors = completion.neighbors
            if completion.error is not None:
                logger.debug("Lookup failed for %r: %s", completion.node, completion.error)
                neighbors = await self.error_policy.handle(completion.error, completion.node)

            self.stats['nodes_expanded'] += 1
            for neighbor in neighbors:
                self.stats['edges_evaluated'] += 1
                decision = strategy.decide(completion.node, neighbor, goal)
                if decision.success:
                    logger.debug("Search %r -> %r resolved at edge %r -> %r with %d lookups outstanding",
                                 start, goal, completion.node, neighbor, run.outstanding)
                    return decision.result
                run.frontier.append(neighbor)

    def _issue_frontier(self, run: _FanOutRun) -> None:
        while run.frontier:
            node = run.frontier.popleft()
            if node in run.visited:
                continue
            run.visited.add(node)

            run.outstanding += 1
            self.stats['outstanding'] = run.outstanding
            self.stats['lookups_issued'] += 1
            self.stats['max_in_flight'] = max(self.stats['max_in_flight'], run.outstanding)

            task = asyncio.create_task(self._fetch(node, run.completions),
                                       name=f"dazzlegraph-lookup-{node!r}")
            run.tasks.add(task)
            task.add_done_callback(run.tasks.discard)

    async def _fetch(self, node: Node, completions: asyncio.Queue) -> None:
        try:
            neighbors = await self.adapter.get_neighbors(node)
        except Exception as e:
            completions.put_nowait(_Completion(node, (), e))
            return
        completions.put_nowait(_Completion(node, neighbors))

    async def _settle_pending(self, run: _FanOutRun) -> None:
        """Cancel unfinished lookups and account for every unconsumed one."""
        pending = list(run.tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        # Each outstanding lookup either posted a result or was cancelled first
        discarded = run.completions.qsize()
        while not run.completions.empty():
            run.completions.get_nowait()
        self.stats['results_discarded'] += discarded
        self.stats['lookups_cancelled'] += run.outstanding - discarded
        run.outstanding = 0
        self.stats['outstanding'] = 0
