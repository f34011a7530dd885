from __future__ import annotations

from typing import Dict

from graphcompose.graph.graph_schema import (
    NodeKind,
    NodeType,
    RelationshipKind,
    RelationshipType,
)

# Domain vocabulary strings accepted on the way in. Several spellings
# may map to the same kind; the first one listed is used on the way out.
NODE_ALIASES: Dict[str, NodeKind] = {
    "value_object": NodeKind.VALUE,
    "value": NodeKind.VALUE,
    "entity_reference": NodeKind.ENTITY_REFERENCE,
    "entity": NodeKind.ENTITY,
    "aggregate": NodeKind.AGGREGATE,
    "service": NodeKind.SERVICE,
    "command": NodeKind.COMMAND,
    "event": NodeKind.EVENT,
}

RELATIONSHIP_ALIASES: Dict[str, RelationshipKind] = {
    "contains": RelationshipKind.CONTAINS,
    "references": RelationshipKind.REFERENCES,
    "depends_on": RelationshipKind.DEPENDS_ON,
    "sequence": RelationshipKind.SEQUENCE,
    "parallel": RelationshipKind.PARALLEL,
    "choice": RelationshipKind.CHOICE,
    "hierarchy": RelationshipKind.HIERARCHY,
}

_NODE_NAMES = {}
for _alias, _kind in NODE_ALIASES.items():
    _NODE_NAMES.setdefault(_kind, _alias)

_RELATIONSHIP_NAMES = {kind: alias for alias, kind in RELATIONSHIP_ALIASES.items()}


def node_type_from_string(text: str) -> NodeType:
    """
    Unknown strings become ``Custom(text)``.
    """
    kind = NODE_ALIASES.get(text)
    if kind is None:
        return NodeType.custom(text)
    return NodeType(kind)


def node_type_to_string(node_type: NodeType) -> str:
    if node_type.is_custom:
        return node_type.name
    return _NODE_NAMES[node_type.kind]


def relationship_from_string(text: str) -> RelationshipType:
    kind = RELATIONSHIP_ALIASES.get(text)
    if kind is None:
        return RelationshipType.custom(text)
    return RelationshipType(kind)


def relationship_to_string(relationship: RelationshipType) -> str:
    if relationship.kind is RelationshipKind.CUSTOM:
        return relationship.name
    return _RELATIONSHIP_NAMES[relationship.kind]


def parse_relationship(text: str) -> RelationshipType:
    """
    Accept either a domain string (``"depends_on"``) or the display
    form (``"DependsOn"``, ``"Custom(owns)"``).
    """
    if text in RELATIONSHIP_ALIASES:
        return RelationshipType(RELATIONSHIP_ALIASES[text])
    try:
        return RelationshipType.parse(text)
    except ValueError:
        return RelationshipType.custom(text)
