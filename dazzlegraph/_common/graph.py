"""Graph store for DazzleGraph.

The Graph is a read-only adjacency mapping with a synchronous and an
asynchronous neighbour accessor. Adapters in the sync and aio packages
wrap it for the searchers; the Graph itself knows nothing about search.
"""

from types import MappingProxyType
from typing import Any, Dict, Hashable, Iterable, Iterator, Mapping, Tuple

Node = Hashable


# Reference graph used throughout the examples and tests.
EXAMPLE_ADJACENCY: Dict[str, Tuple[str, ...]] = {
    'A': ('B', 'C'),
    'B': ('D', 'E'),
    'C': ('D', 'F'),
    'D': ('H', 'I'),
    'E': ('G', 'H'),
    'F': ('I',),
    'G': ('J',),
    'H': (),
    'I': ('K',),
    'J': ('K',),
    'K': (),
}


class Graph:
    """Immutable directed graph keyed by node identifier.

    Neighbour order is preserved exactly as given; it decides discovery
    order and therefore which of several equally short routes is found.

    Looking up a node that was never defined returns an empty tuple
    rather than raising, so a dangling edge simply ends a branch.

    ``None`` is not a valid node: strategies receive it as the parent of
    the start node.
    """

    def __init__(self, adjacency: Mapping[Node, Iterable[Node]]):
        """Copy adjacency data into a read-only mapping.

        Args:
            adjacency: Mapping of node to its outgoing neighbours

        Raises:
            ValueError: If None appears as a node or a neighbour
        """
        adjacency = {node: tuple(neighbors) for node, neighbors in adjacency.items()}
        for node, neighbors in adjacency.items():
            if node is None or None in neighbors:
                raise ValueError(f"None cannot be used as a node identifier (adjacency of {node!r})")
        self._adjacency = MappingProxyType(adjacency)

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[Node, Node]]) -> 'Graph':
        """Build a graph from (source, target) pairs, keeping edge order."""
        adjacency: Dict[Node, list] = {}
        for source, target in edges:
            adjacency.setdefault(source, []).append(target)
            adjacency.setdefault(target, [])
        return cls(adjacency)

    def neighbors(self, node: Node) -> Tuple[Node, ...]:
        """Return the outgoing neighbours of node (empty if unknown)."""
        return self._adjacency.get(node, ())

    async def neighbors_async(self, node: Node) -> Tuple[Node, ...]:
        """Async form of neighbors() with identical ordering."""
        return self.neighbors(node)

    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._adjacency)

    def has_node(self, node: Node) -> bool:
        return node in self._adjacency

    def has_edge(self, source: Node, target: Node) -> bool:
        return target in self.neighbors(source)

    def __contains__(self, node: Any) -> bool:
        return self.has_node(node)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    def __repr__(self) -> str:
        edges = sum(len(n) for n in self._adjacency.values())
        return f"Graph(nodes={len(self._adjacency)}, edges={edges})"


def example_graph() -> Graph:
    """Return the reference graph A..K."""
    return Graph(EXAMPLE_ADJACENCY)
