from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, ClassVar, Dict, NewType, Optional
from uuid import uuid4

NodeId = NewType("NodeId", str)

_CUSTOM_PATTERN = re.compile(r"^Custom\((?P<name>.*)\)$")


def new_node_id() -> NodeId:
    return NodeId(str(uuid4()))


# ---------------------------------------------------------------------
# Node vocabulary
# ---------------------------------------------------------------------


class NodeKind(str, Enum):
    VALUE = "Value"
    ENTITY_REFERENCE = "EntityReference"
    ENTITY = "Entity"
    AGGREGATE = "Aggregate"
    SERVICE = "Service"
    COMMAND = "Command"
    EVENT = "Event"
    CUSTOM = "Custom"


@dataclass(frozen=True)
class NodeType:
    """
    Node tag: one of the known kinds, or ``Custom(name)`` for
    domain-specific extensions.
    """

    kind: NodeKind
    name: Optional[str] = None

    VALUE: ClassVar["NodeType"]
    ENTITY_REFERENCE: ClassVar["NodeType"]
    ENTITY: ClassVar["NodeType"]
    AGGREGATE: ClassVar["NodeType"]
    SERVICE: ClassVar["NodeType"]
    COMMAND: ClassVar["NodeType"]
    EVENT: ClassVar["NodeType"]

    def __post_init__(self) -> None:
        if (self.kind is NodeKind.CUSTOM) != (self.name is not None):
            raise ValueError("only Custom node types carry a name")

    @staticmethod
    def custom(name: str) -> "NodeType":
        return NodeType(NodeKind.CUSTOM, name)

    @staticmethod
    def parse(text: str) -> "NodeType":
        match = _CUSTOM_PATTERN.match(text)
        if match:
            return NodeType.custom(match.group("name"))
        return NodeType(NodeKind(text))

    @property
    def is_custom(self) -> bool:
        return self.kind is NodeKind.CUSTOM

    def __str__(self) -> str:
        if self.kind is NodeKind.CUSTOM:
            return f"Custom({self.name})"
        return self.kind.value


NodeType.VALUE = NodeType(NodeKind.VALUE)
NodeType.ENTITY_REFERENCE = NodeType(NodeKind.ENTITY_REFERENCE)
NodeType.ENTITY = NodeType(NodeKind.ENTITY)
NodeType.AGGREGATE = NodeType(NodeKind.AGGREGATE)
NodeType.SERVICE = NodeType(NodeKind.SERVICE)
NodeType.COMMAND = NodeType(NodeKind.COMMAND)
NodeType.EVENT = NodeType(NodeKind.EVENT)


# ---------------------------------------------------------------------
# Relationship vocabulary
# ---------------------------------------------------------------------


class RelationshipKind(str, Enum):
    CONTAINS = "Contains"
    REFERENCES = "References"
    DEPENDS_ON = "DependsOn"
    SEQUENCE = "Sequence"
    PARALLEL = "Parallel"
    CHOICE = "Choice"
    HIERARCHY = "Hierarchy"
    CUSTOM = "Custom"


# Which relationship kinds express containment. Root/leaf classification
# and the acyclicity check read this table and nothing else.
CONTAINMENT: Dict[RelationshipKind, bool] = {
    RelationshipKind.CONTAINS: True,
    RelationshipKind.HIERARCHY: True,
    RelationshipKind.REFERENCES: False,
    RelationshipKind.DEPENDS_ON: False,
    RelationshipKind.SEQUENCE: False,
    RelationshipKind.PARALLEL: False,
    RelationshipKind.CHOICE: False,
    RelationshipKind.CUSTOM: False,
}


@dataclass(frozen=True)
class RelationshipType:
    kind: RelationshipKind
    name: Optional[str] = None

    CONTAINS: ClassVar["RelationshipType"]
    REFERENCES: ClassVar["RelationshipType"]
    DEPENDS_ON: ClassVar["RelationshipType"]
    SEQUENCE: ClassVar["RelationshipType"]
    PARALLEL: ClassVar["RelationshipType"]
    CHOICE: ClassVar["RelationshipType"]
    HIERARCHY: ClassVar["RelationshipType"]

    def __post_init__(self) -> None:
        if (self.kind is RelationshipKind.CUSTOM) != (self.name is not None):
            raise ValueError("only Custom relationships carry a name")

    @staticmethod
    def custom(name: str) -> "RelationshipType":
        return RelationshipType(RelationshipKind.CUSTOM, name)

    @staticmethod
    def parse(text: str) -> "RelationshipType":
        match = _CUSTOM_PATTERN.match(text)
        if match:
            return RelationshipType.custom(match.group("name"))
        return RelationshipType(RelationshipKind(text))

    @property
    def is_containment(self) -> bool:
        return CONTAINMENT[self.kind]

    def __str__(self) -> str:
        if self.kind is RelationshipKind.CUSTOM:
            return f"Custom({self.name})"
        return self.kind.value


RelationshipType.CONTAINS = RelationshipType(RelationshipKind.CONTAINS)
RelationshipType.REFERENCES = RelationshipType(RelationshipKind.REFERENCES)
RelationshipType.DEPENDS_ON = RelationshipType(RelationshipKind.DEPENDS_ON)
RelationshipType.SEQUENCE = RelationshipType(RelationshipKind.SEQUENCE)
RelationshipType.PARALLEL = RelationshipType(RelationshipKind.PARALLEL)
RelationshipType.CHOICE = RelationshipType(RelationshipKind.CHOICE)
RelationshipType.HIERARCHY = RelationshipType(RelationshipKind.HIERARCHY)


def is_containment(relationship: Any) -> bool:
    """
    Containment test that tolerates tags from foreign vocabularies.

    Tags outside the base vocabulary opt in by exposing a truthy
    ``is_containment`` attribute.
    """
    return bool(getattr(relationship, "is_containment", False))


# ---------------------------------------------------------------------
# Graph elements
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class Node:
    """
    Typed element of a composition graph.
    """

    id: NodeId
    node_type: Any
    label: str
    data: Any

    @staticmethod
    def create(node_type: Any, label: str, data: Any = None) -> "Node":
        return Node(
            id=new_node_id(),
            node_type=node_type,
            label=label,
            data=data,
        )

    def with_data(self, data: Any) -> "Node":
        return replace(self, data=data)

    def with_label(self, label: str) -> "Node":
        return replace(self, label=label)


@dataclass(frozen=True)
class Edge:
    """
    Directed, typed relationship between two nodes of the same graph.
    """

    source: NodeId
    target: NodeId
    relationship: Any


# ---------------------------------------------------------------------
# Graph-level descriptors
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class Vocabulary:
    """
    The tag classes a graph's nodes and edges are drawn from.

    Graphs only compose when their vocabularies unify (are equal).
    """

    name: str
    node_types: type = NodeType
    relationship_types: type = RelationshipType

    def admits_node_type(self, node_type: Any) -> bool:
        return isinstance(node_type, self.node_types)

    def admits_relationship(self, relationship: Any) -> bool:
        return isinstance(relationship, self.relationship_types)

    def unifies_with(self, other: "Vocabulary") -> bool:
        return self == other


BASE_VOCABULARY = Vocabulary(name="base")


class CompositionKind(str, Enum):
    ATOMIC = "Atomic"
    COMPOSITE = "Composite"
    SEQUENTIAL = "Sequential"
    PARALLEL = "Parallel"
    CHOICE = "Choice"
    FUNCTOR = "Functor"
    DOMAIN = "Domain"


@dataclass(frozen=True)
class CompositionType:
    """
    Records how a graph came to be. Informational only.
    """

    kind: CompositionKind
    type_name: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "type_name": self.type_name}

    @staticmethod
    def from_dict(payload: Dict[str, str]) -> "CompositionType":
        return CompositionType(
            kind=CompositionKind(payload["kind"]),
            type_name=payload["type_name"],
        )
