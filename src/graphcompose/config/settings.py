from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------
# Composition policy
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class CompositionConfig:
    """
    Controls label resolution, synthetic root naming and the checks
    operators run before committing a result.
    """

    root_alias: str = "root"
    parallel_root_label: str = "Parallel"
    choice_root_label: str = "Choice"
    enforce_acyclic: bool = True
    log_commits: bool = True


DEFAULT_CONFIG = CompositionConfig()
