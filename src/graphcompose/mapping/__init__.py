"""
Translation between domain vocabulary strings and base graph tags.
"""

from graphcompose.mapping.domain_mapping import (
    node_type_from_string,
    node_type_to_string,
    relationship_from_string,
    relationship_to_string,
    parse_relationship,
)

__all__ = [
    "node_type_from_string",
    "node_type_to_string",
    "relationship_from_string",
    "relationship_to_string",
    "parse_relationship",
]
