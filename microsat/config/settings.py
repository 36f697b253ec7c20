#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Microsat v0.1.0

Run settings: the immutable, validated configuration used by a conversion.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


# Allowed deviation of the theta proportions from 1.0
THETA_TOLERANCE = 1e-14


class OutputMode(Enum):
    """Output layouts for the repeat-length matrix."""
    FLAT = "flat"
    PER_INDIVIDUAL = "per_individual"


def parse_output_mode(value: Any) -> OutputMode:
    """
    Convert a string or OutputMode into an OutputMode.
    
    Raises:
        ConfigurationError: If the value names no known mode
    """
    if isinstance(value, OutputMode):
        return value
    try:
        return OutputMode(str(value).lower().replace('-', '_'))
    except ValueError:
        valid = ', '.join(m.value for m in OutputMode)
        raise ConfigurationError(f"Unknown output mode '{value}'. Use one of: {valid}")


def validate_thetas(loci: int, thetas: Optional[Sequence[float]]) -> Tuple[float, ...]:
    """
    Resolve and validate theta proportions for a locus count.
    
    A single locus receives every site, so its proportion is always 1.0
    and any supplied values are ignored.
    With more than one locus, exactly ``loci`` proportions must be supplied
    and they must sum to 1 within THETA_TOLERANCE.
    
    Args:
        loci: Number of linked loci
        thetas: Proportion of the total theta assigned to each locus
    
    Returns:
        Tuple of theta proportions, one per locus
    
    Raises:
        ConfigurationError: On a count mismatch or a bad sum
    """
    if isinstance(loci, bool) or not isinstance(loci, int) or loci < 1:
        raise ConfigurationError(f"Number of linked loci must be a positive integer, got {loci!r}")
    
    if loci == 1:
        if thetas:
            logger.warning(f"Ignoring {len(thetas)} theta value(s): thetas are only used with more than one locus")
        return (1.0,)
    
    thetas = tuple(thetas or ())
    if len(thetas) != loci:
        raise ConfigurationError(f"expected {loci} thetas for {loci} loci, got {len(thetas)}")
    
    try:
        thetas = tuple(float(t) for t in thetas)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Theta proportions must be numbers, got {list(thetas)}")
    
    # Summed in order, the same way the engine accumulates them
    theta_sum = 0.0
    for theta in thetas:
        theta_sum += theta
    if 1 - theta_sum > THETA_TOLERANCE or theta_sum - 1 > THETA_TOLERANCE:
        raise ConfigurationError(f"sum of thetas (= {theta_sum:f}) is not 1")
    
    return thetas


@dataclass(frozen=True)
class RunConfig:
    """
    Validated settings for one conversion run.
    
    Attributes:
        ancestral_state: Repeat length of every individual before mutation
        loci: Number of fully-linked microsatellite loci
        thetas: Proportion of segregating sites assigned to each locus
        output_mode: Flat (one line per dataset) or per-individual layout
        seed: Seed for the uniform random source (None = OS entropy)
    """
    ancestral_state: int = 0
    loci: int = 1
    thetas: Tuple[float, ...] = ()
    output_mode: OutputMode = OutputMode.FLAT
    seed: Optional[int] = None
    
    def __post_init__(self):
        """Validate settings and fill in default thetas."""
        if isinstance(self.ancestral_state, bool) or not isinstance(self.ancestral_state, int):
            raise ConfigurationError(
                f"Ancestral state must be an integer, got {self.ancestral_state!r}"
            )
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigurationError(f"Seed must be an integer, got {self.seed!r}")
        
        # Use object.__setattr__ because frozen=True
        object.__setattr__(self, 'thetas', validate_thetas(self.loci, self.thetas))
        object.__setattr__(self, 'output_mode', parse_output_mode(self.output_mode))
    
    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'RunConfig':
        """
        Build run settings from the ``simulation`` section of a config dict.
        
        Args:
            config: Full configuration dictionary (see schema.DEFAULT_CONFIG)
        
        Returns:
            Validated RunConfig
        """
        section = config.get('simulation', {}) or {}
        return cls(
            ancestral_state=section.get('ancestral_state', 0),
            loci=section.get('loci', 1),
            thetas=tuple(section.get('thetas') or ()),
            output_mode=section.get('output_mode', OutputMode.FLAT.value),
            seed=section.get('seed'),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the ``simulation`` config section."""
        return {
            'ancestral_state': self.ancestral_state,
            'loci': self.loci,
            'thetas': list(self.thetas) if self.loci > 1 else [],
            'output_mode': self.output_mode.value,
            'seed': self.seed,
        }

# Microsat v0.1.0
# Any usage is subject to this software's license.
