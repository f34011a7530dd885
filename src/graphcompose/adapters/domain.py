from __future__ import annotations

from typing import Protocol, Type, TypeVar, runtime_checkable

from graphcompose.graph.graph_composition import GraphComposition
from graphcompose.graph.graph_schema import NodeType, RelationshipType

D = TypeVar("D", bound="GraphDecomposable")


@runtime_checkable
class GraphComposable(Protocol):
    """
    Domain aggregates that can render themselves as a composition graph.

    Implementations live in domain modules and depend on graphcompose,
    never the other way round.
    """

    def to_graph(self) -> GraphComposition:
        ...


@runtime_checkable
class GraphDecomposable(Protocol):
    @classmethod
    def from_graph(cls: Type[D], graph: GraphComposition) -> D:
        ...


def line_item_graph(product: str, quantity: int, price: float) -> GraphComposition:
    """
    Example adapter output: an order line as a composite graph.
    """
    graph = (
        GraphComposition.composite("LineItem")
        .add_node(NodeType.VALUE, "product", {"name": product})
        .add_node(NodeType.VALUE, "quantity", quantity)
        .add_node(NodeType.VALUE, "price", price)
        .add_node(NodeType.VALUE, "total", quantity * price)
    )
    for label in ("product", "quantity", "price", "total"):
        graph.add_edge_by_label("root", label, RelationshipType.CONTAINS)
    return graph
