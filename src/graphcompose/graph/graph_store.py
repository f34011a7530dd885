from __future__ import annotations

import copy
import networkx as nx
from dataclasses import replace
from typing import Any, Iterable, Iterator, List, Tuple

from graphcompose.errors import UnknownNodeError
from graphcompose.graph.graph_schema import Edge, Node, NodeId


class GraphStore:
    """
    Keyed node storage and ordered edge storage.

    Edges are keyed by a monotonically increasing sequence number so
    that repeated edges between the same pair survive and the global
    insertion order can always be recovered.
    """

    def __init__(self) -> None:
        self._graph = nx.MultiDiGraph()
        self._next_key = 0

    # -------------------- Nodes --------------------

    def insert_node(self, node_type: Any, label: str, data: Any = None) -> NodeId:
        node = Node.create(node_type, label, data)
        self.add_node(node)
        return node.id

    def add_node(self, node: Node) -> None:
        self._graph.add_node(node.id, data=node)

    def replace_node(self, node: Node) -> None:
        if node.id not in self._graph:
            raise UnknownNodeError(node.id)
        self._graph.nodes[node.id]["data"] = node

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self._graph

    def get_node(self, node_id: NodeId) -> Node:
        if node_id not in self._graph:
            raise UnknownNodeError(node_id)
        return self._graph.nodes[node_id]["data"]

    def get_nodes(self) -> List[Node]:
        return [data["data"] for _, data in self._graph.nodes(data=True)]

    def node_ids(self) -> List[NodeId]:
        return list(self._graph.nodes)

    # -------------------- Edges --------------------

    def insert_edge(self, source: NodeId, target: NodeId, relationship: Any) -> Edge:
        for endpoint in (source, target):
            if endpoint not in self._graph:
                raise UnknownNodeError(endpoint)

        edge = Edge(source=source, target=target, relationship=relationship)
        self._graph.add_edge(source, target, key=self._next_key, data=edge)
        self._next_key += 1
        return edge

    def add_edge(self, edge: Edge) -> None:
        self.insert_edge(edge.source, edge.target, edge.relationship)

    def edges(self) -> Iterator[Edge]:
        for _, _, data in self._sorted(self._graph.edges(keys=True, data=True)):
            yield data["data"]

    def get_edges(self) -> List[Edge]:
        return list(self.edges())

    def edges_from(self, node_id: NodeId) -> List[Edge]:
        if node_id not in self._graph:
            return []
        return [
            data["data"]
            for _, _, data in self._sorted(
                self._graph.out_edges(node_id, keys=True, data=True)
            )
        ]

    def edges_to(self, node_id: NodeId) -> List[Edge]:
        if node_id not in self._graph:
            return []
        return [
            data["data"]
            for _, _, data in self._sorted(
                self._graph.in_edges(node_id, keys=True, data=True)
            )
        ]

    @staticmethod
    def _sorted(
        edges: Iterable[Tuple[Any, Any, int, dict]],
    ) -> List[Tuple[Any, Any, dict]]:
        ordered = sorted(edges, key=lambda e: e[2])
        return [(u, v, data) for u, v, _, data in ordered]

    # -------------------- Analytics --------------------

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def as_networkx(self) -> nx.MultiDiGraph:
        """
        Read-only view of the underlying networkx graph.
        """
        return self._graph.copy(as_view=True)

    # -------------------- Cloning --------------------

    def clone(self) -> "GraphStore":
        """
        Same node ids and edge order; payloads are deep-copied.
        """
        g = GraphStore()
        g._graph = self._graph.copy()
        for _, attrs in g._graph.nodes(data=True):
            node = attrs["data"]
            attrs["data"] = replace(node, data=copy.deepcopy(node.data))
        g._next_key = self._next_key
        return g
