"""In-memory graph adapter for synchronous searches."""

from typing import Iterable, Mapping, Sequence, Union

from ..._common.graph import Graph, Node
from ..core.adapter import GraphAdapter


class MappingGraphAdapter(GraphAdapter):
    """Adapter over a Graph or a plain adjacency mapping.

    Plain mappings are copied into a Graph so the search sees a frozen
    view of the data.
    """

    def __init__(self, graph: Union[Graph, Mapping[Node, Iterable[Node]]]):
        self.graph = graph if isinstance(graph, Graph) else Graph(graph)

    def get_neighbors(self, node: Node) -> Sequence[Node]:
        return self.graph.neighbors(node)

    def supports_async(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"MappingGraphAdapter({self.graph!r})"
