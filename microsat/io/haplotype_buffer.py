#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Microsat v0.1.0

Growable per-individual haplotype storage.

One row per sampled chromosome; each row holds the 0/1 allele states of
the segregating sites of the dataset currently being read. Capacity is
owned by the buffer and only ever grows over a run.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

import logging

import numpy as np

from ..errors import AllocationError

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000

# Slack added whenever the buffer grows, so runs of slightly larger
# datasets do not regrow every time
GROWTH_PADDING = 10


class HaplotypeBuffer:
    """
    N rows of allele states with a shared, growable site capacity.
    
    Attributes:
        n_samples: Number of rows (sampled haplotypes)
        capacity: Number of sites each row can currently hold
    """
    
    def __init__(self, n_samples: int, capacity: int = DEFAULT_CAPACITY):
        """
        Initialize the buffer.
        
        Args:
            n_samples: Number of sampled haplotypes (fixed for the run)
            capacity: Initial number of sites per row
        
        Raises:
            AllocationError: If the initial rows cannot be allocated
        """
        if n_samples < 1:
            raise ValueError(f"n_samples must be at least 1, got {n_samples}")
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        
        self.n_samples = n_samples
        self.capacity = capacity
        self._rows = self._allocate(n_samples, capacity)
    
    @staticmethod
    def _allocate(n_samples: int, capacity: int) -> np.ndarray:
        try:
            return np.zeros((n_samples, capacity), dtype=np.uint8)
        except (MemoryError, ValueError, OverflowError) as e:
            # numpy reports sizes past its dimension limit as ValueError
            raise AllocationError(
                f"cannot allocate haplotype buffer of {n_samples} x {capacity} sites"
            ) from e
    
    def ensure_capacity(self, segsites: int) -> bool:
        """
        Make room for ``segsites`` sites in every row.
        
        Rows are regrown to ``segsites + GROWTH_PADDING`` when the request
        reaches the current capacity; smaller requests are a no-op.
        Existing contents are preserved.
        
        Args:
            segsites: Number of sites the next dataset needs
        
        Returns:
            True if the buffer grew
        
        Raises:
            AllocationError: If the larger rows cannot be allocated
        """
        if segsites < self.capacity:
            return False
        
        new_capacity = segsites + GROWTH_PADDING
        grown = self._allocate(self.n_samples, new_capacity)
        grown[:, :self.capacity] = self._rows
        
        logger.debug(f"Haplotype buffer grown: {self.capacity} -> {new_capacity} sites")
        self._rows = grown
        self.capacity = new_capacity
        return True
    
    def store(self, row: int, haplotype: str):
        """
        Store one haplotype string of '0'/'1' characters in a row.
        
        Args:
            row: Row index (0-based sample index)
            haplotype: Allele states, one character per site
        
        Raises:
            IndexError: If the row is out of range
            ValueError: If the haplotype does not fit or is not 0/1
        """
        if not 0 <= row < self.n_samples:
            raise IndexError(f"row {row} out of range for {self.n_samples} samples")
        if len(haplotype) > self.capacity:
            raise ValueError(
                f"haplotype of {len(haplotype)} sites exceeds buffer capacity {self.capacity}"
            )
        if haplotype.strip('01'):
            raise ValueError(f"haplotype contains characters other than '0'/'1': {haplotype!r}")
        
        states = np.frombuffer(haplotype.encode('ascii'), dtype=np.uint8) - ord('0')
        self._rows[row, :len(states)] = states
    
    def view(self, segsites: int) -> np.ndarray:
        """
        Return the first ``segsites`` columns of every row.
        
        The result is a view into the buffer and is overwritten by the
        next dataset.
        """
        if segsites > self.capacity:
            raise ValueError(f"{segsites} sites requested from buffer of capacity {self.capacity}")
        return self._rows[:, :segsites]
    
    def __repr__(self) -> str:
        return f"HaplotypeBuffer(n_samples={self.n_samples}, capacity={self.capacity})"

# Microsat v0.1.0
# Any usage is subject to this software's license.
