"""
Microsat v0.1.0

Configuration management for Microsat.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

from .settings import (
    THETA_TOLERANCE,
    OutputMode,
    RunConfig,
    parse_output_mode,
    validate_thetas,
)
from .schema import (
    DEFAULT_CONFIG,
    default_config,
    load_config,
    save_config_template,
    validate_config,
)
from .parser import ConfigParser

__all__ = [
    "THETA_TOLERANCE",
    "OutputMode",
    "RunConfig",
    "parse_output_mode",
    "validate_thetas",
    "DEFAULT_CONFIG",
    "default_config",
    "load_config",
    "save_config_template",
    "validate_config",
    "ConfigParser",
]
