from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.app.main import create_app
from backend.app.config import AppConfig

from graphcompose.graph.graph_composition import GraphComposition
from graphcompose.graph.graph_schema import NodeType, RelationshipType


@pytest.fixture()
def order_graph() -> GraphComposition:
    return (
        GraphComposition.composite("Order")
        .add_node(NodeType.VALUE, "total", {"amount": 100})
        .add_node(NodeType.VALUE, "status", "pending")
        .add_edge_by_label("root", "total", RelationshipType.CONTAINS)
    )


@pytest.fixture()
def containment_loop() -> GraphComposition:
    """
    root Contains A, and A/B contain each other.
    """
    return (
        GraphComposition.composite("Loop")
        .add_node(NodeType.VALUE, "A", {})
        .add_node(NodeType.VALUE, "B", {})
        .add_edge_by_label("root", "A", RelationshipType.CONTAINS)
        .add_edge_by_label("A", "B", RelationshipType.CONTAINS)
        .add_edge_by_label("B", "A", RelationshipType.CONTAINS)
    )


@pytest.fixture()
def client():
    app = create_app(AppConfig())
    with TestClient(app) as test_client:
        yield test_client
