"""
Graph subsystem for graphcompose.

Defines the node/edge data model, keyed storage, the owning
GraphComposition aggregate and the traversal primitives used by the
composition operators.
"""

from graphcompose.graph.graph_schema import (
    BASE_VOCABULARY,
    CompositionKind,
    CompositionType,
    Edge,
    Node,
    NodeId,
    NodeKind,
    NodeType,
    RelationshipKind,
    RelationshipType,
    Vocabulary,
)
from graphcompose.graph.graph_store import GraphStore
from graphcompose.graph.graph_composition import GraphComposition
from graphcompose.graph.graph_query import (
    GraphQueryEngine,
    find_leaves,
    find_roots,
    fold,
    get_connected_nodes,
    relationship_counts,
    same_shape,
    structure_signature,
    walk,
)

__all__ = [
    "BASE_VOCABULARY",
    "CompositionKind",
    "CompositionType",
    "Edge",
    "Node",
    "NodeId",
    "NodeKind",
    "NodeType",
    "RelationshipKind",
    "RelationshipType",
    "Vocabulary",
    "GraphStore",
    "GraphComposition",
    "GraphQueryEngine",
    "find_leaves",
    "find_roots",
    "fold",
    "get_connected_nodes",
    "relationship_counts",
    "same_shape",
    "structure_signature",
    "walk",
]
