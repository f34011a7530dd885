from graphcompose.graph.graph_composition import GraphComposition
from graphcompose.persistence import to_dict


def _atomic(label, data=None):
    return to_dict(GraphComposition.atomic(label, data if data is not None else {}))


def test_compose_parallel(client):
    response = client.post(
        "/compose/parallel",
        json={"left": _atomic("a", 1), "right": _atomic("b", 2)},
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body["nodes"]) == 3
    assert [e["relationship"] for e in body["edges"]] == ["Contains", "Contains", "Parallel"]
    assert body["composition_type"] == {"kind": "Parallel", "type_name": "Parallel"}


def test_compose_then_keeps_left_root(client):
    left = _atomic("first")
    response = client.post(
        "/compose/then",
        json={"left": left, "right": _atomic("second")},
    )

    assert response.status_code == 200
    body = response.json()
    root = next(n for n in body["nodes"] if n["id"] == body["root"])
    assert root["label"] == "first"
    assert body["root"] != left["root"]


def test_compose_with_domain_relationship_string(client):
    response = client.post(
        "/compose/compose",
        json={
            "left": _atomic("order"),
            "right": _atomic("customer"),
            "relationship": "references",
        },
    )

    assert response.status_code == 200
    assert response.json()["edges"][-1]["relationship"] == "References"


def test_compose_requires_relationship(client):
    response = client.post(
        "/compose/compose",
        json={"left": _atomic("a"), "right": _atomic("b")},
    )

    assert response.status_code == 422


def test_unknown_operator_is_rejected(client):
    response = client.post(
        "/compose/merge",
        json={"left": _atomic("a"), "right": _atomic("b")},
    )

    assert response.status_code == 422


def test_cyclic_input_maps_to_422(client, containment_loop):
    response = client.post(
        "/compose/then",
        json={"left": to_dict(containment_loop), "right": _atomic("b")},
    )

    assert response.status_code == 422
    assert response.json()["error"] == "CycleDetectedError"


def test_unknown_node_maps_to_404(client, order_graph):
    payload = to_dict(order_graph)
    payload["edges"].append(
        {"source": payload["root"], "target": "ghost", "relationship": "Contains"}
    )

    response = client.post("/graph/analyze", json=payload)

    assert response.status_code == 404
    assert response.json()["error"] == "UnknownNodeError"


def test_analyze(client, order_graph):
    response = client.post("/graph/analyze", json=to_dict(order_graph))

    assert response.status_code == 200
    body = response.json()
    assert body["nodes"] == 3
    assert body["edges"] == 1
    assert body["preorder"] == ["Order", "total"]
    assert body["relationships"] == {"Contains": 1}
    assert len(body["roots"]) == 2
    assert len(body["leaves"]) == 2


def test_validate_reports_cycle(client, containment_loop):
    response = client.post("/graph/validate", json=to_dict(containment_loop))

    assert response.status_code == 200
    body = response.json()
    assert body["acyclic"] is False
    assert len(body["cycle"]) == 2


def test_validate_clean_graph(client, order_graph):
    response = client.post("/graph/validate", json=to_dict(order_graph))

    assert response.json() == {"acyclic": True, "cycle": []}


def test_relabel(client, order_graph):
    response = client.post(
        "/graph/fmap/relabel",
        json={"graph": to_dict(order_graph), "prefix": "v2."},
    )

    assert response.status_code == 200
    body = response.json()
    assert [n["label"] for n in body["nodes"]] == ["v2.Order", "v2.total", "v2.status"]
    assert {n["id"] for n in body["nodes"]}.isdisjoint(
        {n.id for n in order_graph.nodes}
    )


def test_malformed_node_type_maps_to_422(client, order_graph):
    payload = to_dict(order_graph)
    payload["nodes"][1]["node_type"] = "value"

    response = client.post("/graph/analyze", json=payload)

    assert response.status_code == 422
    assert response.json()["error"] == "CompositionError"
