#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Microsat v0.1.0

Package initialization and version metadata.

Converts ms coalescent-simulation output into microsatellite repeat-length
data under a single-step mutation model, optionally spread across several
fully-linked loci.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

from .version import __version__
from .errors import (
    MicrosatError,
    ConfigurationError,
    StreamFormatError,
    AllocationError,
)

__all__ = [
    "__version__",
    "MicrosatError",
    "ConfigurationError",
    "StreamFormatError",
    "AllocationError",
]

# Microsat v0.1.0
# Any usage is subject to this software's license.
