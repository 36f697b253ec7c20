#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Microsat v0.1.0

Single-step mutation engine for fully-linked microsatellites.

Every segregating site of an ms dataset becomes one mutation of +1 or -1
repeat units. The site is assigned to one of the linked loci in proportion
to the configured theta weights, and every individual carrying the derived
allele ('1') at that site has the step added to its length at that locus.
Because all sites assigned to a locus hit the same per-individual
accumulator, loci behave as fully linked.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

import logging
from typing import List

import numpy as np

from ..config.settings import RunConfig
from ..io.ms_reader import Dataset
from .random_source import UniformSource

logger = logging.getLogger(__name__)


class MutationEngine:
    """
    Turn ms datasets into repeat-length matrices under the SMM.
    
    Each segregating site consumes exactly two draws from the random
    source, in order: the step direction, then the locus assignment.
    Nothing else draws from the source, so a seeded run is reproducible.
    """
    
    def __init__(self, config: RunConfig, source: UniformSource):
        """
        Initialize mutation engine.
        
        Args:
            config: Validated run settings (ancestral state, loci, thetas)
            source: Uniform random source
        """
        self.config = config
        self.source = source
        self.cumulative_thetas = self._cumulative(config.thetas)
        self.sites_processed = 0
    
    @staticmethod
    def _cumulative(thetas) -> List[float]:
        # Summed in order; rounding may leave the last value just under 1.0
        cumulative = []
        value = 0.0
        for theta in thetas:
            value += theta
            cumulative.append(value)
        return cumulative
    
    @property
    def loci(self) -> int:
        return len(self.cumulative_thetas)
    
    def assign_locus(self, r: float) -> int:
        """
        Map a uniform draw to a locus index.
        
        Returns the smallest index whose cumulative theta is >= r, or the
        last locus when rounding leaves every cumulative value below r.
        """
        for locus, threshold in enumerate(self.cumulative_thetas):
            if r <= threshold:
                return locus
        return self.loci - 1
    
    def draw_step(self) -> int:
        """Draw a mutation direction: -1 or +1 with equal probability."""
        return -1 if self.source.draw() < 0.5 else 1
    
    def simulate(self, dataset: Dataset) -> np.ndarray:
        """
        Compute repeat lengths for one dataset.
        
        Args:
            dataset: Parsed ms dataset
        
        Returns:
            n_samples x loci int64 array of repeat lengths
        """
        lengths = np.full(
            (dataset.n_samples, self.loci),
            self.config.ancestral_state,
            dtype=np.int64,
        )
        
        for site in range(dataset.segsites):
            step = self.draw_step()
            locus = self.assign_locus(self.source.draw())
            carriers = dataset.haplotypes[:, site] == 1
            lengths[carriers, locus] += step
        
        self.sites_processed += dataset.segsites
        logger.debug(
            f"Dataset {dataset.index + 1}: {dataset.segsites} mutations "
            f"across {self.loci} loci"
        )
        return lengths

# Microsat v0.1.0
# Any usage is subject to this software's license.
