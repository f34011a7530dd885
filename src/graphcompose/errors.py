from __future__ import annotations

from typing import Any, List, Sequence


class CompositionError(Exception):
    """
    Base class for every failure raised by the composition engine.
    """


class UnknownNodeError(CompositionError):
    """
    An edge (or lookup) referenced a node id absent from the graph.
    """

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node not found: {node_id}")
        self.node_id = node_id


class LabelNotFoundError(CompositionError):
    def __init__(self, label: str) -> None:
        super().__init__(f"No node labeled {label!r}")
        self.label = label


class IncompatibleTypesError(CompositionError):
    """
    Two graphs (or a graph and a tag) do not share a vocabulary.
    """

    def __init__(self, left: str, right: str) -> None:
        super().__init__(f"Incompatible composition types: {left} and {right}")
        self.left = left
        self.right = right


class CycleDetectedError(CompositionError):
    def __init__(self, cycle: Sequence[Any] = ()) -> None:
        super().__init__("Cycle detected in composition")
        self.cycle: List[Any] = list(cycle)


class InvariantViolationError(CompositionError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Invariant violation: {name}")
        self.name = name


class FunctorError(CompositionError):
    """
    A functor transform broke the structure-preservation contract.

    This signals a programming error in the transform, not a condition
    callers are expected to recover from.
    """
