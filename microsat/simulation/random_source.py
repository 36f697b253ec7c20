"""
Microsat v0.1.0

Uniform random sources for the mutation engine.

The engine only needs independent uniform draws in [0, 1), taken one at a
time in a fixed order. Keeping the source behind a small interface lets a
run be seeded for reproducibility, or replayed from a known sequence.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

import numpy as np


class UniformSource(ABC):
    """Sequential stream of uniform draws in [0, 1)."""
    
    @abstractmethod
    def draw(self) -> float:
        """Return the next uniform draw."""
        pass


class NumpyUniformSource(UniformSource):
    """
    Uniform draws from a numpy Generator (PCG64).
    
    Args:
        seed: Seed for reproducible runs (None = OS entropy)
    """
    
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        self.draws = 0
    
    def draw(self) -> float:
        self.draws += 1
        return float(self._rng.random())
    
    def __repr__(self) -> str:
        return f"NumpyUniformSource(seed={self.seed}, draws={self.draws})"


class SequenceUniformSource(UniformSource):
    """
    Replays a fixed sequence of draws.
    
    Raises IndexError once the sequence is exhausted.
    """
    
    def __init__(self, values: Iterable[float]):
        self.values = [float(v) for v in values]
        self.draws = 0
    
    def draw(self) -> float:
        if self.draws >= len(self.values):
            raise IndexError(f"draw sequence exhausted after {len(self.values)} draws")
        value = self.values[self.draws]
        self.draws += 1
        return value
    
    @property
    def remaining(self) -> int:
        return len(self.values) - self.draws

# Microsat v0.1.0
# Any usage is subject to this software's license.
