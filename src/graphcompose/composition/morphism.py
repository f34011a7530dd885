"""
Structure-preserving transforms over composition graphs.

Laws (design invariants, enforced by the test suite rather than by
the engine):

1. Functor identity: fmap(g, id) has the same shape as g.
2. Functor composition: fmap(fmap(g, f), h) has the same shape as
   fmap(g, h . f).
3. Morphism associativity: (m3 . m2) . m1 and m3 . (m2 . m1) produce
   graphs of the same shape for every well-formed morphism.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import replace
from functools import reduce
from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from graphcompose.errors import CompositionError, FunctorError, IncompatibleTypesError
from graphcompose.graph.graph_composition import GraphComposition
from graphcompose.graph.graph_schema import (
    CompositionKind,
    CompositionType,
    Node,
    NodeId,
    Vocabulary,
    new_node_id,
)
from graphcompose.graph.graph_store import GraphStore

NodeTransform = Callable[[Node], Node]


# ---------------------------------------------------------------------
# Functor
# ---------------------------------------------------------------------


def fmap(
    graph: GraphComposition,
    transform: NodeTransform,
    *,
    vocabulary: Optional[Vocabulary] = None,
) -> GraphComposition:
    """
    Apply ``transform`` to every node, keeping the topology.

    The result has freshly minted node ids; edges are carried over
    through the same translation, so node count and edge sequence are
    unchanged. ``transform`` receives a private copy of each node and
    must return a Node with the same id.
    """
    store = GraphStore()
    translation: Dict[NodeId, NodeId] = {}

    for node in graph.store.get_nodes():
        mapped = transform(replace(node, data=copy.deepcopy(node.data)))

        if not isinstance(mapped, Node):
            raise FunctorError(
                f"transform returned {type(mapped).__name__} for node {node.id}"
            )
        if mapped.id != node.id:
            raise FunctorError(f"transform changed the identity of node {node.id}")

        fresh = replace(mapped, id=new_node_id())
        store.add_node(fresh)
        translation[node.id] = fresh.id

    for edge in graph.store.edges():
        store.insert_edge(
            translation[edge.source],
            translation[edge.target],
            edge.relationship,
        )

    result = GraphComposition(
        name=graph.name,
        store=store,
        root=translation.get(graph.root) if graph.root is not None else None,
        vocabulary=vocabulary or graph.vocabulary,
        composition_type=CompositionType(
            CompositionKind.FUNCTOR, graph.composition_type.type_name
        ),
        config=graph.config,
    )
    result.metadata = dict(graph.metadata)
    return result


# ---------------------------------------------------------------------
# Morphisms
# ---------------------------------------------------------------------


@runtime_checkable
class GraphMorphism(Protocol):
    """
    Any transform from one graph to another.

    Implementations may change the node/relationship vocabulary and
    signal failure by raising CompositionError.
    """

    def apply(self, graph: GraphComposition) -> GraphComposition:
        ...


class IdentityMorphism:
    def apply(self, graph: GraphComposition) -> GraphComposition:
        return fmap(graph, lambda node: node)


class FunctorMorphism:
    """
    Lifts a node transform into a morphism.
    """

    def __init__(self, transform: NodeTransform) -> None:
        self.transform = transform

    def apply(self, graph: GraphComposition) -> GraphComposition:
        return fmap(graph, self.transform)


class VocabularyMorphism:
    """
    Re-tags every node and edge into a target vocabulary.

    ``node_map`` and ``relationship_map`` translate individual tags.
    A tag the target vocabulary does not admit raises
    IncompatibleTypesError; nothing is returned in that case.
    """

    def __init__(
        self,
        *,
        target: Vocabulary,
        node_map: Callable[[Any], Any],
        relationship_map: Callable[[Any], Any],
        source: Optional[Vocabulary] = None,
    ) -> None:
        self.target = target
        self.node_map = node_map
        self.relationship_map = relationship_map
        self.source = source

    def apply(self, graph: GraphComposition) -> GraphComposition:
        if self.source is not None and not self.source.unifies_with(graph.vocabulary):
            raise IncompatibleTypesError(graph.vocabulary.name, self.source.name)

        store = GraphStore()
        translation: Dict[NodeId, NodeId] = {}

        for node in graph.store.get_nodes():
            node_type = self.node_map(node.node_type)
            if not self.target.admits_node_type(node_type):
                raise IncompatibleTypesError(str(node_type), self.target.name)

            fresh = Node.create(node_type, node.label, copy.deepcopy(node.data))
            store.add_node(fresh)
            translation[node.id] = fresh.id

        for edge in graph.store.edges():
            relationship = self.relationship_map(edge.relationship)
            if not self.target.admits_relationship(relationship):
                raise IncompatibleTypesError(str(relationship), self.target.name)

            store.insert_edge(
                translation[edge.source],
                translation[edge.target],
                relationship,
            )

        return GraphComposition(
            name=graph.name,
            store=store,
            root=translation.get(graph.root) if graph.root is not None else None,
            vocabulary=self.target,
            composition_type=CompositionType(
                CompositionKind.FUNCTOR,
                f"{graph.vocabulary.name}->{self.target.name}",
            ),
            config=graph.config,
        )


class ComposedMorphism:
    """
    ``outer . inner``: applies ``inner`` first, then ``outer``.
    """

    def __init__(self, outer: GraphMorphism, inner: GraphMorphism) -> None:
        self.outer = outer
        self.inner = inner

    def apply(self, graph: GraphComposition) -> GraphComposition:
        return self.outer.apply(self.inner.apply(graph))


def compose_morphisms(*morphisms: GraphMorphism) -> GraphMorphism:
    """
    Mathematical composition: ``compose_morphisms(m2, m1)`` is m2 . m1,
    so the right-most morphism runs first.
    """
    if not morphisms:
        return IdentityMorphism()
    return reduce(ComposedMorphism, morphisms)


def apply_morphism(graph: GraphComposition, morphism: GraphMorphism) -> GraphComposition:
    logger = logging.getLogger("graphcompose.morphism")
    logger.debug(
        "applying %s to graph %s (%s)",
        type(morphism).__name__,
        graph.name,
        graph.vocabulary.name,
    )

    result = morphism.apply(graph)
    if not isinstance(result, GraphComposition):
        raise CompositionError(
            f"{type(morphism).__name__}.apply returned {type(result).__name__}"
        )

    logger.debug(
        "morphism %s produced %d nodes / %d edges in vocabulary %s",
        type(morphism).__name__,
        result.node_count(),
        result.edge_count(),
        result.vocabulary.name,
    )
    return result
