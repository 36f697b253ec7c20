"""
Microsat v0.1.0

Configuration schema for Microsat.

Defines all available configuration parameters with defaults and validation.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

import copy
from typing import Dict, Any, Optional, List, Union
from pathlib import Path
import yaml

from ..errors import ConfigurationError
from .settings import RunConfig


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Mutation Model
    # ========================================================================
    'simulation': {
        'ancestral_state': 0,  # Repeat length before any mutation
        'loci': 1,  # Number of fully-linked STRs
        'thetas': [],  # Per-locus theta proportions (required when loci > 1)
        'output_mode': 'flat',  # 'flat' or 'per_individual'
        'seed': None,  # None = seed from OS entropy
    },
    
    # ========================================================================
    # Input / Output
    # ========================================================================
    'io': {
        'input': '-',  # ms output; '-' reads stdin, '.gz' is decompressed
        'output': '-',  # '-' writes stdout
    },
    
    # ========================================================================
    # Logging (always on stderr)
    # ========================================================================
    'logging': {
        'level': 'WARNING',  # DEBUG, INFO, WARNING, ERROR
    },
}

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def default_config() -> Dict[str, Any]:
    """Return a deep copy of DEFAULT_CONFIG that callers may modify."""
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.
    
    Args:
        config_path: Path to YAML config file (None = use defaults)
    
    Returns:
        Configuration dictionary
    """
    from .parser import ConfigParser
    
    return ConfigParser(config_path).to_dict()


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.
    
    Args:
        base: Base dictionary
        override: Override dictionary
    
    Returns:
        Merged dictionary
    """
    result = copy.deepcopy(base)
    
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    
    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.
    
    Args:
        output_path: Output file path
        template: Template type ('default', 'linked', 'per_individual')
    """
    config = default_config()
    
    # Customize for specific templates
    if template == 'linked':
        config['simulation']['loci'] = 2
        config['simulation']['thetas'] = [0.5, 0.5]
        
    elif template == 'per_individual':
        config['simulation']['output_mode'] = 'per_individual'
    
    elif template != 'default':
        raise ConfigurationError(f"Unknown configuration template: {template}")
    
    with open(output_path, 'w') as f:
        f.write("# Microsat configuration\n")
        f.write("# Values given on the command line override this file.\n\n")
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.
    
    Args:
        config: Configuration to validate
    
    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    
    for section in DEFAULT_CONFIG:
        if not isinstance(config.get(section), dict):
            errors.append(f"Missing or invalid configuration section: {section}")
    if errors:
        return errors
    
    # Mutation model (theta sums, locus count, output mode, seed)
    try:
        RunConfig.from_dict(config)
    except ConfigurationError as e:
        errors.append(str(e))
    
    # I/O paths
    for key in ('input', 'output'):
        value = config['io'].get(key)
        if not isinstance(value, str) or not value:
            errors.append(f"io.{key} must be a path or '-', got {value!r}")
    
    level = config['logging'].get('level')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")
    
    return errors

# Microsat v0.1.0
# Any usage is subject to this software's license.
