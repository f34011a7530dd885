"""
Invariant validation for composition graphs.

Two layers:
- structural checks (root present, containment acyclic)
- named, caller-registered predicates checked on demand
"""

from graphcompose.validation.invariants import (
    Invariant,
    check_invariants,
    check_all_invariants,
    ensure_acyclic,
    find_containment_cycle,
    validate,
)

__all__ = [
    "Invariant",
    "check_invariants",
    "check_all_invariants",
    "ensure_acyclic",
    "find_containment_cycle",
    "validate",
]
