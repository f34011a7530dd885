from __future__ import annotations

from collections import Counter
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    Iterator,
    List,
    Optional,
    Set,
    Tuple,
    TypeVar,
)

from graphcompose.graph.graph_schema import Node, NodeId, is_containment

if TYPE_CHECKING:
    from graphcompose.graph.graph_composition import GraphComposition

T = TypeVar("T")


def find_roots(graph: "GraphComposition") -> List[NodeId]:
    """
    Nodes with no incoming containment edge.

    Sequence, Parallel and Choice edges do not make a node a child.
    """
    store = graph.store
    return [
        node_id
        for node_id in store.node_ids()
        if not any(is_containment(e.relationship) for e in store.edges_to(node_id))
    ]


def find_leaves(graph: "GraphComposition") -> List[NodeId]:
    """
    Nodes with no outgoing edge of any relationship.
    """
    store = graph.store
    return [node_id for node_id in store.node_ids() if not store.edges_from(node_id)]


def get_connected_nodes(graph: "GraphComposition", node_id: NodeId) -> List[NodeId]:
    """
    Direct neighbors in both directions. One hop, never transitive.
    """
    store = graph.store
    if not store.has_node(node_id):
        return []

    seen: Set[NodeId] = set()
    connected: List[NodeId] = []

    for edge in store.get_edges():
        if edge.source == node_id:
            other = edge.target
        elif edge.target == node_id:
            other = edge.source
        else:
            continue

        if other not in seen:
            seen.add(other)
            connected.append(other)

    return connected


def walk(graph: "GraphComposition") -> Iterator[Node]:
    """
    Pre-order traversal from the root.

    Outgoing edges are followed in insertion order and every node is
    yielded at most once; cycles are silently not re-entered.
    """
    if graph.root is None:
        return

    store = graph.store
    visited: Set[NodeId] = set()
    stack: List[NodeId] = [graph.root]

    while stack:
        node_id = stack.pop()
        if node_id in visited:
            continue
        visited.add(node_id)

        yield store.get_node(node_id)

        children = [e.target for e in store.edges_from(node_id)]
        stack.extend(reversed(children))


def fold(
    graph: "GraphComposition",
    init: T,
    f: Callable[[T, Node], T],
) -> T:
    acc = init
    for node in walk(graph):
        acc = f(acc, node)
    return acc


def relationship_counts(graph: "GraphComposition") -> Counter:
    return Counter(str(e.relationship) for e in graph.store.edges())


def structure_signature(graph: "GraphComposition") -> Tuple[list, list, Optional[int]]:
    """
    Identity-free description of a graph: nodes by insertion position,
    edges as position pairs in insertion order, and the root position.
    """
    nodes = graph.store.get_nodes()
    position: Dict[NodeId, int] = {node.id: i for i, node in enumerate(nodes)}

    node_part = [(node.node_type, node.label, node.data) for node in nodes]
    edge_part = [
        (position[e.source], position[e.target], e.relationship)
        for e in graph.store.edges()
    ]
    root = position.get(graph.root) if graph.root is not None else None
    return node_part, edge_part, root


def same_shape(a: "GraphComposition", b: "GraphComposition") -> bool:
    """
    True when ``a`` and ``b`` are equal up to node identity.
    """
    return structure_signature(a) == structure_signature(b)


class GraphQueryEngine:
    """
    Analysis views over a single composition graph.
    """

    def __init__(self, graph: "GraphComposition") -> None:
        self.graph = graph

    def roots(self) -> List[NodeId]:
        return find_roots(self.graph)

    def leaves(self) -> List[NodeId]:
        return find_leaves(self.graph)

    def neighbors(self, node_id: NodeId) -> List[NodeId]:
        return get_connected_nodes(self.graph, node_id)

    def preorder(self) -> List[Node]:
        return list(walk(self.graph))

    def fold(self, init: T, f: Callable[[T, Node], T]) -> T:
        return fold(self.graph, init, f)

    def labels(self, node_ids: List[NodeId]) -> List[str]:
        return [self.graph.store.get_node(n).label for n in node_ids]

    def relationship_counts(self) -> Counter:
        return relationship_counts(self.graph)
