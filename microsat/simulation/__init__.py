"""
Simulation module for Microsat.

This module provides the mutation model:
- Single-step mutation engine for fully-linked loci
- Uniform random sources (seeded numpy generator, replayed sequences)
"""

from .mutation_engine import MutationEngine
from .random_source import (
    UniformSource,
    NumpyUniformSource,
    SequenceUniformSource,
)

__all__ = [
    "MutationEngine",
    "UniformSource",
    "NumpyUniformSource",
    "SequenceUniformSource",
]
