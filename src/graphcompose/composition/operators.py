from __future__ import annotations

import copy
import logging
from functools import reduce
from typing import Any, Dict, Iterable, Optional

from graphcompose.config.settings import CompositionConfig, DEFAULT_CONFIG
from graphcompose.errors import CompositionError, IncompatibleTypesError
from graphcompose.graph.graph_composition import GraphComposition
from graphcompose.graph.graph_schema import (
    CompositionKind,
    CompositionType,
    Node,
    NodeId,
    NodeType,
    RelationshipType,
)
from graphcompose.graph.graph_store import GraphStore
from graphcompose.validation.invariants import ensure_acyclic


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------


def then(
    a: GraphComposition,
    b: GraphComposition,
    *,
    config: CompositionConfig = DEFAULT_CONFIG,
) -> GraphComposition:
    """
    Sequential composition: ``a`` before ``b``.

    The result holds both graphs (fresh identities) plus a Sequence edge
    from a's root to b's root, and is rooted at a's root.
    """
    return _join(
        a,
        b,
        RelationshipType.SEQUENCE,
        composition_type=CompositionType(CompositionKind.SEQUENTIAL, "Sequential"),
        config=config,
    )


def compose(
    a: GraphComposition,
    b: GraphComposition,
    relationship: Any,
    *,
    config: CompositionConfig = DEFAULT_CONFIG,
) -> GraphComposition:
    """
    Generic merge: like ``then`` but the connecting edge carries
    ``relationship``.
    """
    return _join(
        a,
        b,
        relationship,
        composition_type=CompositionType(CompositionKind.COMPOSITE, str(relationship)),
        config=config,
    )


def parallel(
    a: GraphComposition,
    b: GraphComposition,
    *,
    config: CompositionConfig = DEFAULT_CONFIG,
) -> GraphComposition:
    """
    Concurrent composition under a new synthetic root.

    The new root Contains both input roots; a single Parallel edge
    between the input roots marks them as concurrent.
    """
    return _fork(
        a,
        b,
        RelationshipType.PARALLEL,
        label=config.parallel_root_label,
        kind=CompositionKind.PARALLEL,
        config=config,
    )


def choice(
    a: GraphComposition,
    b: GraphComposition,
    *,
    config: CompositionConfig = DEFAULT_CONFIG,
) -> GraphComposition:
    """
    Mutually exclusive composition. Same shape as ``parallel`` with a
    Choice edge between the input roots.
    """
    return _fork(
        a,
        b,
        RelationshipType.CHOICE,
        label=config.choice_root_label,
        kind=CompositionKind.CHOICE,
        config=config,
    )


def sequence(
    graphs: Iterable[GraphComposition],
    *,
    config: CompositionConfig = DEFAULT_CONFIG,
) -> GraphComposition:
    """
    Left fold of ``then`` over two or more graphs.
    """
    graphs = list(graphs)
    if len(graphs) < 2:
        raise ValueError("sequence needs at least two graphs")
    return reduce(lambda acc, g: then(acc, g, config=config), graphs)


# ------------------------------------------------------------------
# Shapes
# ------------------------------------------------------------------


def _join(
    a: GraphComposition,
    b: GraphComposition,
    relationship: Any,
    *,
    composition_type: CompositionType,
    config: CompositionConfig,
) -> GraphComposition:
    _check_compatible(a, b, relationships=(relationship,))

    store = GraphStore()
    left = _merge_into(store, a)
    right = _merge_into(store, b)

    root = left[a.root]
    store.insert_edge(root, right[b.root], relationship)

    return _commit(
        store,
        root,
        name=a.name,
        composition_type=composition_type,
        source=a,
        config=config,
    )


def _fork(
    a: GraphComposition,
    b: GraphComposition,
    link: RelationshipType,
    *,
    label: str,
    kind: CompositionKind,
    config: CompositionConfig,
) -> GraphComposition:
    _check_compatible(
        a,
        b,
        relationships=(RelationshipType.CONTAINS, link),
        root_type=NodeType.AGGREGATE,
    )

    store = GraphStore()
    root = store.insert_node(NodeType.AGGREGATE, label, {})
    left = _merge_into(store, a)
    right = _merge_into(store, b)

    store.insert_edge(root, left[a.root], RelationshipType.CONTAINS)
    store.insert_edge(root, right[b.root], RelationshipType.CONTAINS)
    store.insert_edge(left[a.root], right[b.root], link)

    return _commit(
        store,
        root,
        name=label,
        composition_type=CompositionType(kind, label),
        source=a,
        config=config,
    )


# ------------------------------------------------------------------
# Internals
# ------------------------------------------------------------------


def _check_compatible(
    a: GraphComposition,
    b: GraphComposition,
    *,
    relationships: Iterable[Any] = (),
    root_type: Optional[Any] = None,
) -> None:
    for graph in (a, b):
        if graph.root is None:
            raise CompositionError(f"graph {graph.name!r} has no root")

    vocabulary = a.vocabulary
    if not vocabulary.unifies_with(b.vocabulary):
        logging.getLogger("graphcompose.compose").info(
            "refusing to compose %s (%s) with %s (%s)",
            a.name,
            vocabulary.name,
            b.name,
            b.vocabulary.name,
        )
        raise IncompatibleTypesError(vocabulary.name, b.vocabulary.name)

    for relationship in relationships:
        if not vocabulary.admits_relationship(relationship):
            raise IncompatibleTypesError(str(relationship), vocabulary.name)

    if root_type is not None and not vocabulary.admits_node_type(root_type):
        raise IncompatibleTypesError(str(root_type), vocabulary.name)


def _merge_into(store: GraphStore, graph: GraphComposition) -> Dict[NodeId, NodeId]:
    """
    Copy ``graph`` into ``store`` under fresh node ids.

    Returns the old->new id translation table.
    """
    translation: Dict[NodeId, NodeId] = {}

    for node in graph.store.get_nodes():
        fresh = Node.create(node.node_type, node.label, copy.deepcopy(node.data))
        store.add_node(fresh)
        translation[node.id] = fresh.id

    for edge in graph.store.edges():
        store.insert_edge(
            translation[edge.source],
            translation[edge.target],
            edge.relationship,
        )

    return translation


def _commit(
    store: GraphStore,
    root: NodeId,
    *,
    name: str,
    composition_type: CompositionType,
    source: GraphComposition,
    config: CompositionConfig,
) -> GraphComposition:
    if config.enforce_acyclic:
        ensure_acyclic(store, root)

    result = GraphComposition(
        name=name,
        store=store,
        root=root,
        vocabulary=source.vocabulary,
        composition_type=composition_type,
        config=config,
    )

    if config.log_commits:
        logging.getLogger("graphcompose.compose").debug(
            "committed %s graph %s: nodes=%d edges=%d",
            composition_type.kind.value,
            result.id,
            store.node_count(),
            store.edge_count(),
        )

    return result
