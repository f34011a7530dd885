from enum import Enum

import pytest

from graphcompose.composition import operators
from graphcompose.config.settings import CompositionConfig
from graphcompose.errors import CompositionError, CycleDetectedError, IncompatibleTypesError
from graphcompose.graph.graph_composition import GraphComposition
from graphcompose.graph.graph_query import (
    GraphQueryEngine,
    fold,
    relationship_counts,
    same_shape,
)
from graphcompose.graph.graph_schema import (
    CompositionKind,
    NodeType,
    RelationshipType,
    Vocabulary,
)
from graphcompose.persistence import from_dict, to_dict


def _edges_by_label(graph):
    return [
        (
            graph.get_node(e.source).label,
            graph.get_node(e.target).label,
            str(e.relationship),
        )
        for e in graph.edges
    ]


def _preorder_labels(graph):
    return fold(graph, [], lambda acc, node: acc + [node.label])


# ---------------- then ----------------


def test_then_links_roots_with_sequence_edge(order_graph):
    pricing = GraphComposition.composite("CalculatePricing")

    result = order_graph.then(pricing)

    assert result.node_count() == order_graph.node_count() + pricing.node_count()
    assert result.root_node.label == "Order"
    assert _edges_by_label(result) == [
        ("Order", "total", "Contains"),
        ("Order", "CalculatePricing", "Sequence"),
    ]
    assert result.composition_type.kind is CompositionKind.SEQUENTIAL


def test_then_mints_fresh_identities_and_leaves_inputs_untouched(order_graph):
    pricing = GraphComposition.composite("CalculatePricing")
    before = (order_graph.node_count(), order_graph.edge_count())

    result = operators.then(order_graph, pricing)

    input_ids = {n.id for n in order_graph.nodes} | {n.id for n in pricing.nodes}
    assert input_ids.isdisjoint({n.id for n in result.nodes})
    assert (order_graph.node_count(), order_graph.edge_count()) == before
    assert pricing.edge_count() == 0
    assert result.id not in (order_graph.id, pricing.id)


def test_then_result_does_not_share_payload_storage():
    a = GraphComposition.atomic("a", {"items": [1]})
    result = a.then(GraphComposition.atomic("b", {}))

    result.root_node.data["items"].append(2)
    assert a.root_node.data == {"items": [1]}


def test_operators_keep_payloads_exactly_as_stored():
    empty = from_dict(to_dict(GraphComposition.atomic("empty", None)))
    assert empty.root_node.data is None

    result = empty.then(GraphComposition.atomic("next", 0))

    assert [n.data for n in result.nodes] == [None, 0]
    assert operators.parallel(empty, empty).nodes[1].data is None


def test_then_is_associative_up_to_edge_placement():
    a = GraphComposition.atomic("a", 1)
    b = GraphComposition.atomic("b", 2)
    c = GraphComposition.atomic("c", 3)

    left = a.then(b).then(c)
    right = a.then(b.then(c))

    assert left.node_count() == right.node_count() == 3
    assert relationship_counts(left) == relationship_counts(right)
    assert relationship_counts(left)["Sequence"] == 2
    assert _preorder_labels(left) == ["a", "b", "c"]
    assert _preorder_labels(right) == ["a", "b", "c"]


def test_sequence_folds_then_over_many_graphs():
    steps = [GraphComposition.atomic(name, {}) for name in "wxyz"]

    result = operators.sequence(steps)

    assert result.node_count() == 4
    assert relationship_counts(result)["Sequence"] == 3
    assert _preorder_labels(result) == list("wxyz")


def test_sequence_requires_two_graphs():
    with pytest.raises(ValueError):
        operators.sequence([GraphComposition.atomic("solo", {})])


# ---------------- parallel / choice ----------------


def test_parallel_shape(order_graph):
    payment = (
        GraphComposition.composite("VerifyPayment")
        .add_node(NodeType.SERVICE, "gateway", {})
        .add_edge_by_label("root", "gateway", RelationshipType.CONTAINS)
    )

    result = operators.parallel(order_graph, payment)

    assert result.node_count() == order_graph.node_count() + payment.node_count() + 1
    counts = relationship_counts(result)
    assert counts["Parallel"] == 1
    assert counts["Contains"] == 2 + 1 + 1

    root = result.root_node
    assert root.label == "Parallel"
    assert root.node_type == NodeType.AGGREGATE

    edges = _edges_by_label(result)
    assert ("Parallel", "Order", "Contains") in edges
    assert ("Parallel", "VerifyPayment", "Contains") in edges
    assert ("Order", "VerifyPayment", "Parallel") in edges


def test_parallel_of_atomics_has_two_contains_edges():
    result = GraphComposition.atomic("x", 1).parallel(GraphComposition.atomic("y", 2))

    assert result.node_count() == 3
    assert relationship_counts(result) == {"Contains": 2, "Parallel": 1}
    engine = GraphQueryEngine(result)
    assert engine.labels(engine.roots()) == ["Parallel"]


def test_choice_uses_choice_edge_and_no_parallel_edge():
    result = operators.choice(
        GraphComposition.atomic("card", {}),
        GraphComposition.atomic("invoice", {}),
    )

    assert result.node_count() == 3
    assert relationship_counts(result) == {"Contains": 2, "Choice": 1}
    assert ("card", "invoice", "Choice") in _edges_by_label(result)
    assert result.root_node.label == "Choice"


def test_synthetic_root_labels_follow_config():
    config = CompositionConfig(parallel_root_label="Fork", choice_root_label="Either")
    a = GraphComposition.atomic("a", {})
    b = GraphComposition.atomic("b", {})

    assert operators.parallel(a, b, config=config).root_node.label == "Fork"
    assert operators.choice(a, b, config=config).root_node.label == "Either"


# ---------------- compose ----------------


def test_compose_uses_caller_relationship(order_graph):
    customer = GraphComposition.entity("Customer", "c-1")

    result = operators.compose(order_graph, customer, RelationshipType.REFERENCES)

    assert result.node_count() == 4
    assert _edges_by_label(result)[-1] == ("Order", "Customer", "References")
    assert result.root_node.label == "Order"


def test_compose_then_equivalence_for_sequence(order_graph):
    other = GraphComposition.composite("Next")

    assert same_shape(
        operators.compose(order_graph, other, RelationshipType.SEQUENCE),
        operators.then(order_graph, other),
    )


def test_compose_detects_containment_cycle(containment_loop):
    other = GraphComposition.atomic("other", {})
    before = (containment_loop.node_count(), containment_loop.edge_count())

    with pytest.raises(CycleDetectedError) as exc:
        operators.compose(containment_loop, other, RelationshipType.DEPENDS_ON)

    assert len(exc.value.cycle) == 2
    assert (containment_loop.node_count(), containment_loop.edge_count()) == before


def test_hierarchy_edges_count_as_containment():
    a = GraphComposition.composite("A")
    b = (
        GraphComposition.composite("B")
        .add_node(NodeType.VALUE, "leaf", {})
        .add_edge_by_label("root", "leaf", RelationshipType.CONTAINS)
        .add_edge_by_label("leaf", "root", RelationshipType.HIERARCHY)
    )

    with pytest.raises(CycleDetectedError):
        operators.compose(a, b, RelationshipType.CONTAINS)


def test_cycle_in_second_operand_is_found_through_sequence_edge(containment_loop):
    with pytest.raises(CycleDetectedError):
        operators.then(GraphComposition.atomic("first", {}), containment_loop)


def test_non_containment_cycles_are_allowed():
    loop = (
        GraphComposition.composite("Retry")
        .add_node(NodeType.COMMAND, "attempt", {})
        .add_edge_by_label("root", "attempt", RelationshipType.SEQUENCE)
        .add_edge_by_label("attempt", "root", RelationshipType.SEQUENCE)
    )

    result = operators.compose(loop, GraphComposition.atomic("done", {}), RelationshipType.SEQUENCE)
    assert result.node_count() == 3


def test_acyclicity_check_can_be_disabled(containment_loop):
    config = CompositionConfig(enforce_acyclic=False)

    result = operators.compose(
        containment_loop,
        GraphComposition.atomic("x", {}),
        RelationshipType.DEPENDS_ON,
        config=config,
    )
    assert result.node_count() == 4


# ---------------- vocabularies ----------------


class Step(Enum):
    START = "start"
    TASK = "task"


class Flow(Enum):
    NEXT = "next"
    FAIL = "fail"


WORKFLOW = Vocabulary(name="workflow", node_types=Step, relationship_types=Flow)


def _workflow_graph(name):
    graph = GraphComposition(name=name, vocabulary=WORKFLOW)
    graph.root = graph.store.insert_node(Step.START, name, {})
    task = graph.store.insert_node(Step.TASK, f"{name}-task", {})
    graph.add_edge(graph.root, task, Flow.NEXT)
    return graph


def test_compose_rejects_non_unifiable_vocabularies():
    with pytest.raises(IncompatibleTypesError) as exc:
        operators.compose(
            GraphComposition.atomic("base", {}),
            _workflow_graph("flow"),
            RelationshipType.SEQUENCE,
        )

    assert (exc.value.left, exc.value.right) == ("base", "workflow")


def test_compose_within_a_custom_vocabulary():
    result = operators.compose(_workflow_graph("a"), _workflow_graph("b"), Flow.FAIL)

    assert result.vocabulary == WORKFLOW
    assert result.node_count() == 4
    assert [e.relationship for e in result.edges] == [Flow.NEXT, Flow.NEXT, Flow.FAIL]


def test_base_operators_reject_vocabularies_without_their_tags():
    with pytest.raises(IncompatibleTypesError):
        operators.then(_workflow_graph("a"), _workflow_graph("b"))
    with pytest.raises(IncompatibleTypesError):
        operators.parallel(_workflow_graph("a"), _workflow_graph("b"))


def test_rootless_graphs_cannot_be_composed():
    with pytest.raises(CompositionError):
        operators.then(GraphComposition(name="empty"), GraphComposition.atomic("x", {}))
