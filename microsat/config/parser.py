#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Microsat v0.1.0

Configuration parser: YAML loading, merging and command-line overrides.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

import os
import re
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..errors import ConfigurationError
from .schema import _deep_merge, default_config


class ConfigParser:
    """
    Parse Microsat configuration files.
    
    Features:
    - Load YAML configuration files
    - Merge with default values
    - Environment variable substitution (${VAR} and ${VAR:-default})
    - CLI parameter overrides
    - Dotted notation access (e.g., config.get('simulation.loci'))
    """
    
    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration parser.
        
        Args:
            config_file: Path to YAML configuration file (optional)
        """
        self.config_file = Path(config_file) if config_file else None
        self._config: Dict[str, Any] = default_config()
        
        # Load user configuration if provided
        if self.config_file:
            self._load_user_config()
    
    def _load_user_config(self):
        """Load and merge user configuration file."""
        if not self.config_file or not self.config_file.exists():
            raise ConfigurationError(
                f"Configuration file not found: {self.config_file}"
            )
        
        try:
            with open(self.config_file, 'r') as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in config file {self.config_file}: {e}"
            )
        
        if user_config is None:
            return
        if not isinstance(user_config, dict):
            raise ConfigurationError(
                f"Config file {self.config_file} must contain a mapping, "
                f"got {type(user_config).__name__}"
            )
        
        # User values override defaults
        self._config = _deep_merge(self._config, user_config)
        self._config = self._substitute_env_vars(self._config)
    
    def _substitute_env_vars(self, config: Any) -> Any:
        """
        Recursively substitute environment variables in configuration.
        
        Supports:
        - ${VAR}: Replace with environment variable VAR
        - ${VAR:-default}: Replace with VAR, or 'default' if not set

        A value that is nothing but one reference is re-read as YAML, so
        ``ancestral_state: ${ANC:-0}`` yields an integer.

        Args:
            config: Configuration value (can be dict, list, or string)
        
        Returns:
            Configuration with substituted values
        """
        if isinstance(config, dict):
            return {k: self._substitute_env_vars(v) for k, v in config.items()}
        
        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]
        
        elif isinstance(config, str):
            # Pattern: ${VAR} or ${VAR:-default}
            pattern = r'\$\{([^}:]+)(?::-(.*?))?\}'

            def replace_var(match):
                var_name = match.group(1)
                default_value = match.group(2)
                return os.environ.get(var_name, default_value or '')

            substituted = re.sub(pattern, replace_var, config)
            if not re.fullmatch(pattern, config.strip()):
                return substituted

            # Lone reference: recover the scalar type of the substituted text
            try:
                value = yaml.safe_load(substituted)
            except yaml.YAMLError:
                return substituted
            if value is None or isinstance(value, (dict, list)):
                return substituted
            return value
        
        else:
            return config
    
    def merge_cli_overrides(self, overrides: Dict[str, Any]):
        """
        Merge command-line overrides into configuration.
        
        Values of None are skipped so unset CLI options leave the file
        (or default) value in place.
        
        Args:
            overrides: Dictionary of override values
                      Keys use dotted notation (e.g., 'simulation.loci')
        """
        for key, value in overrides.items():
            if value is None:
                continue
            
            keys = key.split('.')
            
            # Navigate to the nested dictionary
            target = self._config
            for k in keys[:-1]:
                if k not in target:
                    target[k] = {}
                target = target[k]
            
            target[keys[-1]] = value
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.
        
        Supports dotted notation for nested access.
        
        Args:
            key: Configuration key (e.g., 'simulation.ancestral_state')
            default: Default value if key not found
        
        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self._config
        
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        
        return value
    
    def to_dict(self) -> Dict[str, Any]:
        """
        Export configuration as dictionary.
        
        Returns:
            Complete configuration dictionary
        """
        return self._config.copy()
    
    def __repr__(self) -> str:
        """String representation."""
        return f"ConfigParser(config_file={self.config_file})"

# Microsat v0.1.0
# Any usage is subject to this software's license.
