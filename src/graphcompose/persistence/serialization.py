from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from graphcompose.config.settings import CompositionConfig, DEFAULT_CONFIG
from graphcompose.errors import CompositionError, UnknownNodeError
from graphcompose.graph.graph_composition import GraphComposition
from graphcompose.graph.graph_schema import (
    BASE_VOCABULARY,
    CompositionType,
    Node,
    NodeId,
    NodeType,
    RelationshipType,
)
from graphcompose.graph.graph_store import GraphStore

NODE_COLUMNS = ["id", "node_type", "label", "data"]
EDGE_COLUMNS = ["source", "target", "relationship"]


# ---------------------------------------------------------------------
# Dict form
# ---------------------------------------------------------------------


def to_dict(graph: GraphComposition) -> Dict[str, Any]:
    """
    Structural form of a graph. Registered invariants are never
    included; callers re-register them after loading.
    """
    return {
        "id": graph.id,
        "name": graph.name,
        "root": graph.root,
        "vocabulary": graph.vocabulary.name,
        "composition_type": graph.composition_type.to_dict(),
        "metadata": dict(graph.metadata),
        "nodes": [
            {
                "id": node.id,
                "node_type": str(node.node_type),
                "label": node.label,
                "data": node.data,
            }
            for node in graph.store.get_nodes()
        ],
        "edges": [
            {
                "source": edge.source,
                "target": edge.target,
                "relationship": str(edge.relationship),
            }
            for edge in graph.store.edges()
        ],
    }


def _load_store(payload: Dict[str, Any]) -> GraphStore:
    store = GraphStore()
    for item in payload.get("nodes", []):
        store.add_node(
            Node(
                id=NodeId(str(item["id"])),
                node_type=NodeType.parse(item["node_type"]),
                label=str(item["label"]),
                data=item.get("data"),
            )
        )

    for item in payload.get("edges", []):
        store.insert_edge(
            NodeId(str(item["source"])),
            NodeId(str(item["target"])),
            RelationshipType.parse(item["relationship"]),
        )
    return store


def from_dict(
    payload: Dict[str, Any],
    *,
    config: CompositionConfig = DEFAULT_CONFIG,
) -> GraphComposition:
    vocabulary = payload.get("vocabulary", BASE_VOCABULARY.name)
    if vocabulary != BASE_VOCABULARY.name:
        raise CompositionError(
            f"cannot load graph in vocabulary {vocabulary!r}; only "
            f"{BASE_VOCABULARY.name!r} graphs are serializable"
        )

    try:
        store = _load_store(payload)
        name = str(payload["name"])
        composition_type = payload.get("composition_type")
        composition_type = (
            CompositionType.from_dict(composition_type) if composition_type else None
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise CompositionError(
            f"malformed graph payload: {type(exc).__name__}: {exc}"
        ) from exc

    root = payload.get("root")
    if root is not None and not store.has_node(root):
        raise UnknownNodeError(root)

    graph = GraphComposition(
        name=name,
        store=store,
        root=NodeId(root) if root is not None else None,
        composition_type=composition_type,
        config=config,
        id=payload.get("id"),
    )
    graph.metadata = dict(payload.get("metadata") or {})

    logging.getLogger("graphcompose.persistence").debug(
        "loaded graph %s: nodes=%d edges=%d",
        graph.name,
        store.node_count(),
        store.edge_count(),
    )
    return graph


# ---------------------------------------------------------------------
# Tabular form
# ---------------------------------------------------------------------


def to_frames(graph: GraphComposition) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Node and edge tables, rows in insertion order.
    """
    payload = to_dict(graph)
    nodes_df = pd.DataFrame(payload["nodes"], columns=NODE_COLUMNS)
    edges_df = pd.DataFrame(payload["edges"], columns=EDGE_COLUMNS)
    return nodes_df, edges_df


def from_frames(
    nodes_df: pd.DataFrame,
    edges_df: pd.DataFrame,
    *,
    name: str,
    root: Optional[str] = None,
    config: CompositionConfig = DEFAULT_CONFIG,
) -> GraphComposition:
    for frame, columns in ((nodes_df, NODE_COLUMNS), (edges_df, EDGE_COLUMNS)):
        missing = [c for c in columns if c not in frame.columns]
        if missing:
            raise CompositionError(f"missing columns: {', '.join(missing)}")

    nodes = [
        {
            "id": str(row["id"]),
            "node_type": str(row["node_type"]),
            "label": str(row["label"]),
            "data": row["data"],
        }
        for _, row in nodes_df.iterrows()
    ]
    edges = [
        {
            "source": str(row["source"]),
            "target": str(row["target"]),
            "relationship": str(row["relationship"]),
        }
        for _, row in edges_df.iterrows()
    ]

    logging.getLogger("graphcompose.persistence").info(
        "read nodes=%s edges=%s for graph %s", len(nodes), len(edges), name
    )
    return from_dict(
        {"name": name, "root": root, "nodes": nodes, "edges": edges},
        config=config,
    )
