"""
Composition operators and graph transforms.

- operators: then / parallel / choice / compose over two graphs
- morphism: fmap (functor) and vocabulary-changing morphisms
"""

from graphcompose.composition.operators import (
    then,
    parallel,
    choice,
    compose,
    sequence,
)
from graphcompose.composition.morphism import (
    GraphMorphism,
    IdentityMorphism,
    FunctorMorphism,
    VocabularyMorphism,
    ComposedMorphism,
    compose_morphisms,
    apply_morphism,
    fmap,
)

__all__ = [
    "then",
    "parallel",
    "choice",
    "compose",
    "sequence",
    "GraphMorphism",
    "IdentityMorphism",
    "FunctorMorphism",
    "VocabularyMorphism",
    "ComposedMorphism",
    "compose_morphisms",
    "apply_morphism",
    "fmap",
]
