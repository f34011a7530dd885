from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional

import networkx as nx

from graphcompose.errors import (
    CycleDetectedError,
    InvariantViolationError,
    UnknownNodeError,
)
from graphcompose.graph.graph_schema import NodeId, is_containment
from graphcompose.graph.graph_store import GraphStore

if TYPE_CHECKING:
    from graphcompose.graph.graph_composition import GraphComposition

Predicate = Callable[["GraphComposition"], bool]


@dataclass(frozen=True)
class Invariant:
    """
    Named predicate over a graph.

    Invariants are process-local capabilities: they never travel with
    serialized graphs and must be re-registered after a reload.
    """

    name: str
    predicate: Predicate

    def holds(self, graph: "GraphComposition") -> bool:
        return bool(self.predicate(graph))


# ---------------------------------------------------------------------
# Registered invariants
# ---------------------------------------------------------------------


def check_invariants(graph: "GraphComposition") -> None:
    """
    Evaluate registered invariants in registration order, raising
    InvariantViolationError for the first one that fails.
    """
    for invariant in graph.invariants:
        if not invariant.holds(graph):
            logging.getLogger("graphcompose.validation").info(
                "invariant %r failed on graph %s", invariant.name, graph.name
            )
            raise InvariantViolationError(invariant.name)


def check_all_invariants(graph: "GraphComposition") -> List[str]:
    """
    Evaluate every registered invariant and return the names of those
    that fail, in registration order. An empty list means all hold.
    """
    failed = [inv.name for inv in graph.invariants if not inv.holds(graph)]
    if failed:
        logging.getLogger("graphcompose.validation").info(
            "graph %s failed %d of %d invariants: %s",
            graph.name,
            len(failed),
            len(graph.invariants),
            ", ".join(failed),
        )
    return failed


# ---------------------------------------------------------------------
# Structural checks
# ---------------------------------------------------------------------


def find_containment_cycle(
    store: GraphStore,
    root: Optional[NodeId],
) -> Optional[List[NodeId]]:
    """
    Return a containment cycle among the nodes reachable from ``root``.

    Reachability follows edges of every relationship; the cycle itself
    must consist of containment edges only.
    """
    if root is None or not store.has_node(root):
        return None

    graph = store.as_networkx()
    reachable = nx.descendants(graph, root) | {root}

    containment = nx.subgraph_view(
        graph,
        filter_node=lambda n: n in reachable,
        filter_edge=lambda u, v, k: is_containment(
            graph.edges[u, v, k]["data"].relationship
        ),
    )

    try:
        cycle = nx.find_cycle(containment, orientation="original")
    except nx.NetworkXNoCycle:
        return None

    return [u for u, *_ in cycle]


def ensure_acyclic(store: GraphStore, root: Optional[NodeId]) -> None:
    cycle = find_containment_cycle(store, root)
    if cycle is not None:
        logging.getLogger("graphcompose.validation").warning(
            "containment cycle through %d nodes: %s", len(cycle), cycle
        )
        raise CycleDetectedError(cycle)


def validate(graph: "GraphComposition") -> None:
    """
    Full structural validation followed by fail-fast invariant checks.
    """
    if graph.root is not None and not graph.store.has_node(graph.root):
        raise UnknownNodeError(graph.root)

    ensure_acyclic(graph.store, graph.root)
    check_invariants(graph)
