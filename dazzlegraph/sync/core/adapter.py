"""GraphAdapter abstraction for DazzleGraph.

The GraphAdapter decouples where neighbour data lives (an in-memory
mapping, a database, a web API) from the searchers that walk it.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from ..._common.graph import Node


class GraphAdapter(ABC):
    """Abstract adapter for reading outgoing edges of a directed graph.

    Searchers only ever ask an adapter for a node's neighbours, so any
    backing store that can answer that question can be searched.
    """

    @abstractmethod
    def get_neighbors(self, node: Node) -> Sequence[Node]:
        """Get the outgoing neighbours of a node.

        The ordering must be deterministic across calls; it decides the
        order in which edges are evaluated. Unknown nodes should yield an
        empty sequence rather than raise.

        Args:
            node: The node to expand

        Returns:
            Ordered sequence of neighbour nodes
        """
        pass

    # Capability flags - adapters declare what they support

    def supports_async(self) -> bool:
        """Check if adapter offers native async lookups.

        Returns:
            True if an async counterpart exists
        """
        return False

    def supports_concurrency(self) -> bool:
        """Check if get_neighbors may be called from several threads at once.

        ThreadedFanOutSearcher refuses adapters that return False.

        Returns:
            True if concurrent calls are safe
        """
        return True
