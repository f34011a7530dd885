"""
Contracts for domain adapters that turn aggregates into graphs.
"""

from graphcompose.adapters.domain import (
    GraphComposable,
    GraphDecomposable,
    line_item_graph,
)

__all__ = [
    "GraphComposable",
    "GraphDecomposable",
    "line_item_graph",
]
