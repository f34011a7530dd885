"""
Configuration layer for graphcompose.

Configuration is explicit (passed to the operators that need it, never
read from globals) and immutable once constructed.
"""

from graphcompose.config.settings import CompositionConfig, DEFAULT_CONFIG

__all__ = [
    "CompositionConfig",
    "DEFAULT_CONFIG",
]
