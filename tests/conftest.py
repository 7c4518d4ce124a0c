"""Shared fixtures for DazzleGraph tests."""

from collections import deque
from typing import Optional

import pytest

from dazzlegraph import Graph, example_graph


def bfs_distance(graph: Graph, start, goal) -> Optional[int]:
    """Fewest edges from start to goal (0 when equal), or None if unreachable."""
    if start == goal:
        return 0
    distances = {start: 0}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for neighbor in graph.neighbors(node):
            if neighbor not in distances:
                distances[neighbor] = distances[node] + 1
                if neighbor == goal:
                    return distances[neighbor]
                queue.append(neighbor)
    return None


def assert_valid_route(graph: Graph, route, start, goal, minimal: bool = True):
    """Route starts at start, ends at goal and follows edges (minimal unless told otherwise)."""
    assert route[0] == start
    assert route[-1] == goal
    for source, target in zip(route, route[1:]):
        assert graph.has_edge(source, target), f"{source}->{target} is not an edge"
    if minimal:
        assert len(route) - 1 == bfs_distance(graph, start, goal)


@pytest.fixture
def graph():
    """The reference graph.

    Structure:
        A -> B, C
        B -> D, E        C -> D, F
        D -> H, I        E -> G, H        F -> I
        G -> J           I -> K           J -> K
        H, K -> (none)
    """
    return example_graph()


@pytest.fixture
def diamond():
    """Two equally short routes to X; B is issued before C.

        A -> B -> X
        A -> C -> X
    """
    return Graph({'A': ['B', 'C'], 'B': ['X'], 'C': ['X'], 'X': []})


ALL_PAIRS = [(s, g) for s in sorted(example_graph()) for g in sorted(example_graph())]
