"""
Structural persistence contract: dict and DataFrame views of a graph.

Invariants are process-local and never persisted.
"""

from graphcompose.persistence.serialization import (
    to_dict,
    from_dict,
    to_frames,
    from_frames,
)

__all__ = [
    "to_dict",
    "from_dict",
    "to_frames",
    "from_frames",
]
