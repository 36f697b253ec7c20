"""
Microsat v0.1.0

Logging configuration.

Diagnostics always go to stderr; stdout is reserved for repeat-length data
so output can be piped straight into downstream tools.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_log_level(verbose: bool = False, quiet: bool = False,
                      configured: Optional[Union[str, int]] = None) -> int:
    """
    Pick the effective log level.
    
    --verbose wins over --quiet, which wins over the configured level.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    if configured is None:
        return logging.WARNING
    if isinstance(configured, int):
        return configured
    return getattr(logging, str(configured).upper(), logging.WARNING)


def setup_logging(level: Union[str, int] = logging.WARNING):
    """
    Configure root logging on stderr.
    
    Args:
        level: Logging level name or number
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

# Microsat v0.1.0
# Any usage is subject to this software's license.
