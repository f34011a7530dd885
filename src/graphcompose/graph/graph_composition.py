from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import uuid4

from graphcompose.config.settings import CompositionConfig, DEFAULT_CONFIG
from graphcompose.errors import LabelNotFoundError
from graphcompose.graph.graph_schema import (
    BASE_VOCABULARY,
    CompositionKind,
    CompositionType,
    Edge,
    Node,
    NodeId,
    NodeType,
    Vocabulary,
)
from graphcompose.graph.graph_store import GraphStore

if TYPE_CHECKING:
    from graphcompose.composition.morphism import GraphMorphism
    from graphcompose.validation.invariants import Invariant, Predicate


class GraphComposition:
    """
    A named graph with a designated root, grown through builder calls.

    Builder calls either succeed and return the (mutated) graph, so they
    chain, or raise and leave the graph untouched. Composition operators
    never mutate their inputs; they allocate a new graph.
    """

    def __init__(
        self,
        *,
        name: str,
        store: Optional[GraphStore] = None,
        root: Optional[NodeId] = None,
        vocabulary: Vocabulary = BASE_VOCABULARY,
        composition_type: Optional[CompositionType] = None,
        config: CompositionConfig = DEFAULT_CONFIG,
        id: Optional[str] = None,
    ) -> None:
        self.id = id or str(uuid4())
        self.name = name
        self.store = store if store is not None else GraphStore()
        self.root = root
        self.vocabulary = vocabulary
        self.composition_type = composition_type or CompositionType(
            CompositionKind.COMPOSITE, name
        )
        self.config = config
        self.metadata: Dict[str, Any] = {}
        self.invariants: List["Invariant"] = []

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def atomic(
        cls,
        label: str,
        data: Any = None,
        *,
        config: CompositionConfig = DEFAULT_CONFIG,
    ) -> "GraphComposition":
        """
        Single Value node holding ``data``; that node is the root.
        """
        return cls._single_root(
            name=label,
            node_type=NodeType.VALUE,
            data=data,
            composition_type=CompositionType(CompositionKind.ATOMIC, label),
            config=config,
        )

    @classmethod
    def composite(
        cls,
        name: str,
        *,
        config: CompositionConfig = DEFAULT_CONFIG,
    ) -> "GraphComposition":
        """
        Synthetic Aggregate root labeled ``name``, ready to be grown.
        """
        return cls._single_root(
            name=name,
            node_type=NodeType.AGGREGATE,
            data={},
            composition_type=CompositionType(CompositionKind.COMPOSITE, name),
            config=config,
        )

    @classmethod
    def entity(
        cls,
        entity_type: str,
        entity_id: str,
        *,
        config: CompositionConfig = DEFAULT_CONFIG,
    ) -> "GraphComposition":
        return cls._single_root(
            name=entity_type,
            node_type=NodeType.ENTITY_REFERENCE,
            data={"id": str(entity_id)},
            composition_type=CompositionType(CompositionKind.DOMAIN, entity_type),
            config=config,
        )

    @classmethod
    def aggregate(
        cls,
        aggregate_type: str,
        aggregate_id: str,
        *,
        config: CompositionConfig = DEFAULT_CONFIG,
    ) -> "GraphComposition":
        return cls._single_root(
            name=aggregate_type,
            node_type=NodeType.AGGREGATE,
            data={"id": str(aggregate_id)},
            composition_type=CompositionType(CompositionKind.DOMAIN, aggregate_type),
            config=config,
        )

    @classmethod
    def _single_root(
        cls,
        *,
        name: str,
        node_type: NodeType,
        data: Any,
        composition_type: CompositionType,
        config: CompositionConfig,
    ) -> "GraphComposition":
        store = GraphStore()
        root = store.insert_node(node_type, name, data)
        return cls(
            name=name,
            store=store,
            root=root,
            composition_type=composition_type,
            config=config,
        )

    # ------------------------------------------------------------------
    # Builder
    # ------------------------------------------------------------------

    def add_node(self, node_type: Any, label: str, data: Any = None) -> "GraphComposition":
        self.store.insert_node(node_type, label, data)
        return self

    def add_edge(
        self,
        source: NodeId,
        target: NodeId,
        relationship: Any,
    ) -> "GraphComposition":
        self.store.insert_edge(source, target, relationship)
        return self

    def add_edge_by_label(
        self,
        source_label: str,
        target_label: str,
        relationship: Any,
    ) -> "GraphComposition":
        """
        Link two nodes by label.

        Duplicate labels resolve to the first-inserted node. The root
        alias (``"root"`` by default) always resolves to the graph root.
        Both labels are resolved before anything is written.
        """
        source = self.resolve_label(source_label)
        target = self.resolve_label(target_label)
        self.store.insert_edge(source, target, relationship)
        return self

    def with_invariant(self, predicate: "Predicate", name: str) -> "GraphComposition":
        from graphcompose.validation.invariants import Invariant

        self.invariants.append(Invariant(name=name, predicate=predicate))
        return self

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve_label(self, label: str) -> NodeId:
        if label == self.config.root_alias and self.root is not None:
            return self.root

        node = self.find_node_by_label(label)
        if node is None:
            raise LabelNotFoundError(label)
        return node.id

    def find_node_by_label(self, label: str) -> Optional[Node]:
        for node in self.store.get_nodes():
            if node.label == label:
                return node
        return None

    def get_node(self, node_id: NodeId) -> Node:
        return self.store.get_node(node_id)

    @property
    def root_node(self) -> Optional[Node]:
        if self.root is None:
            return None
        return self.store.get_node(self.root)

    @property
    def nodes(self) -> List[Node]:
        return self.store.get_nodes()

    @property
    def edges(self) -> List[Edge]:
        return self.store.get_edges()

    def node_count(self) -> int:
        return self.store.node_count()

    def edge_count(self) -> int:
        return self.store.edge_count()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def check_invariants(self) -> None:
        from graphcompose.validation.invariants import check_invariants

        check_invariants(self)

    def check_all_invariants(self) -> List[str]:
        from graphcompose.validation.invariants import check_all_invariants

        return check_all_invariants(self)

    def validate(self) -> None:
        from graphcompose.validation.invariants import validate

        validate(self)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def then(self, other: "GraphComposition") -> "GraphComposition":
        from graphcompose.composition import operators

        return operators.then(self, other, config=self.config)

    def parallel(self, other: "GraphComposition") -> "GraphComposition":
        from graphcompose.composition import operators

        return operators.parallel(self, other, config=self.config)

    def choice(self, other: "GraphComposition") -> "GraphComposition":
        from graphcompose.composition import operators

        return operators.choice(self, other, config=self.config)

    def compose(self, other: "GraphComposition", relationship: Any) -> "GraphComposition":
        from graphcompose.composition import operators

        return operators.compose(self, other, relationship, config=self.config)

    def fmap(self, transform) -> "GraphComposition":
        from graphcompose.composition.morphism import fmap

        return fmap(self, transform)

    def apply(self, morphism: "GraphMorphism") -> "GraphComposition":
        from graphcompose.composition.morphism import apply_morphism

        return apply_morphism(self, morphism)

    # ------------------------------------------------------------------
    # Copying
    # ------------------------------------------------------------------

    def copy(self) -> "GraphComposition":
        """
        Structural copy sharing node identities with this graph.

        Invariants are not carried over.
        """
        g = GraphComposition(
            name=self.name,
            store=self.store.clone(),
            root=self.root,
            vocabulary=self.vocabulary,
            composition_type=self.composition_type,
            config=self.config,
            id=self.id,
        )
        g.metadata = dict(self.metadata)
        return g

    def __repr__(self) -> str:
        return (
            f"GraphComposition(name={self.name!r}, nodes={self.node_count()}, "
            f"edges={self.edge_count()}, invariants={len(self.invariants)})"
        )
