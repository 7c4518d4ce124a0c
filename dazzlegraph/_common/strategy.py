"""Search strategies for DazzleGraph.

A strategy is consulted once per discovered edge and decides whether the
search is over. Searchers own the traversal; strategies own the answer.
The same strategy classes are used by every execution discipline, which
is what makes sync, suspending and fan-out searches comparable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from .config import ParentRecording
from .errors import ConfigurationError
from .graph import Node

R = TypeVar('R')


@dataclass(frozen=True)
class StrategyResult(Generic[R]):
    """Tagged outcome of a single edge decision.

    ``success`` False means "no decision, keep searching" and ``result``
    is meaningless. ``success`` True ends the search with ``result`` as
    the payload, whatever its truthiness.
    """

    success: bool
    result: Optional[R] = None

    @classmethod
    def no_decision(cls) -> 'StrategyResult[Any]':
        return _NO_DECISION

    @classmethod
    def decided(cls, payload: R) -> 'StrategyResult[R]':
        return cls(True, payload)


_NO_DECISION: StrategyResult[Any] = StrategyResult(False)


class SearchStrategy(ABC, Generic[R]):
    """Abstract base class for per-edge search decisions.

    Searchers call ``reset()`` before every search and then
    ``decide(None, start, goal)`` once for the start node itself, so a
    strategy sees the start before any real edge. After that ``decide``
    is called once per discovered edge, in discovery order, and never
    concurrently with itself.
    """

    @abstractmethod
    def decide(self, parent: Optional[Node], candidate: Node, goal: Node) -> StrategyResult[R]:
        """Evaluate one discovered edge.

        Args:
            parent: Node whose lookup discovered candidate (None for the start node)
            candidate: Newly discovered node
            goal: Node being searched for

        Returns:
            StrategyResult telling the searcher whether to stop
        """
        pass

    def reset(self) -> None:
        """Forget state from a previous search. Stateless strategies need nothing."""


class PathExistsStrategy(SearchStrategy[bool]):
    """Succeed with True as soon as the goal is discovered."""

    def decide(self, parent: Optional[Node], candidate: Node, goal: Node) -> StrategyResult[bool]:
        if candidate != goal:
            return StrategyResult.no_decision()
        return StrategyResult.decided(True)


class ShortestRouteStrategy(SearchStrategy[List[Node]]):
    """Reconstruct the route to the goal by backtracking parent pointers.

    Every decision records who discovered the candidate. When the goal
    shows up, the parent map is walked from the goal back to the start
    node and reversed. The start node is recorded with no parent and is
    never overwritten, so the walk always ends there.

    With ParentRecording.WRITE_ONCE (default) the first discovery wins,
    which gives a minimal route under breadth-first discovery order even
    when concurrent lookups complete out of order. With
    ParentRecording.OVERWRITE the most recent discovery wins, unless the
    candidate is an ancestor of the discovering node; such a write would
    detach the candidate from the start node and is skipped.

    Nodes must not be None, which marks the start node's parent.
    """

    def __init__(self, parent_recording: ParentRecording = ParentRecording.WRITE_ONCE):
        self.parent_recording = parent_recording
        self._parents: Dict[Node, Optional[Node]] = {}

    def reset(self) -> None:
        self._parents.clear()

    @property
    def parents(self) -> Dict[Node, Optional[Node]]:
        """Copy of the current parent map (for inspection)."""
        return dict(self._parents)

    def decide(self, parent: Optional[Node], candidate: Node, goal: Node) -> StrategyResult[List[Node]]:
        self._record(parent, candidate)

        if candidate != goal:
            return StrategyResult.no_decision()

        return StrategyResult.decided(self._route_to(candidate))

    def _record(self, parent: Optional[Node], candidate: Node) -> None:
        if parent is None:
            self._parents[candidate] = None
            return

        if candidate in self._parents:
            # Root entries are pinned in both modes
            if self._parents[candidate] is None:
                return
            if self.parent_recording is ParentRecording.WRITE_ONCE:
                return

        # Keeps the parent map acyclic: a node is never placed under its own descendant
        if self._is_ancestor(candidate, parent):
            return

        self._parents[candidate] = parent

    def _is_ancestor(self, node: Node, of: Node) -> bool:
        current: Optional[Node] = of
        while current is not None:
            if current == node:
                return True
            current = self._parents.get(current)
        return False

    def _route_to(self, node: Node) -> List[Node]:
        route = [node]
        seen = {node}
        current = self._parents.get(node)
        while current is not None and current not in seen:
            route.append(current)
            seen.add(current)
            current = self._parents.get(current)
        route.reverse()
        return route


class StrategyKind(Enum):
    """Built-in strategy variants."""
    EXISTS = "exists"
    SHORTEST_ROUTE = "shortest_route"


def create_strategy(
    kind: Union[StrategyKind, str],
    parent_recording: ParentRecording = ParentRecording.WRITE_ONCE
) -> SearchStrategy:
    """Create a fresh strategy instance by kind.

    Args:
        kind: StrategyKind or its string value ('exists', 'shortest_route')
        parent_recording: Parent rule for the shortest-route strategy

    Returns:
        New SearchStrategy instance

    Raises:
        ConfigurationError: If kind is not recognized
    """
    if isinstance(kind, str):
        try:
            kind = StrategyKind(kind.lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown search strategy: {kind}. "
                f"Choose from: {', '.join(k.value for k in StrategyKind)}"
            ) from None

    if kind is StrategyKind.EXISTS:
        return PathExistsStrategy()
    if kind is StrategyKind.SHORTEST_ROUTE:
        return ShortestRouteStrategy(parent_recording)

    raise ConfigurationError(f"Unknown search strategy: {kind!r}")


def resolve_strategy(
    strategy: Union[SearchStrategy, StrategyKind, str],
    parent_recording: ParentRecording = ParentRecording.WRITE_ONCE
) -> SearchStrategy:
    """Return strategy itself if it is an instance, otherwise build one."""
    if isinstance(strategy, SearchStrategy):
        return strategy
    return create_strategy(strategy, parent_recording)
