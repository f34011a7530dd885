"""
graphcompose
============

An in-memory graph composition engine: domain concepts become typed
graphs, and graphs combine through sequential, parallel, choice and
generic composition, functors and vocabulary-changing morphisms.

Core idea:
- Everything is a graph; composing graphs always yields a new graph.

Public API:
- GraphComposition
- NodeType / RelationshipType
- then / parallel / choice / compose
- fmap / GraphMorphism
"""

from graphcompose.graph.graph_schema import (
    Edge,
    Node,
    NodeType,
    RelationshipType,
    Vocabulary,
    BASE_VOCABULARY,
)
from graphcompose.graph.graph_composition import GraphComposition
from graphcompose.graph.graph_query import (
    find_leaves,
    find_roots,
    fold,
    get_connected_nodes,
)
from graphcompose.composition.operators import then, parallel, choice, compose
from graphcompose.composition.morphism import GraphMorphism, fmap
from graphcompose.errors import (
    CompositionError,
    CycleDetectedError,
    FunctorError,
    IncompatibleTypesError,
    InvariantViolationError,
    LabelNotFoundError,
    UnknownNodeError,
)

__all__ = [
    "Edge",
    "Node",
    "NodeType",
    "RelationshipType",
    "Vocabulary",
    "BASE_VOCABULARY",
    "GraphComposition",
    "find_leaves",
    "find_roots",
    "fold",
    "get_connected_nodes",
    "then",
    "parallel",
    "choice",
    "compose",
    "GraphMorphism",
    "fmap",
    "CompositionError",
    "CycleDetectedError",
    "FunctorError",
    "IncompatibleTypesError",
    "InvariantViolationError",
    "LabelNotFoundError",
    "UnknownNodeError",
]

__version__ = "0.1.0"
