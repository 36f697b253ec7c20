"""
Utilities module for Microsat.

This module provides the glue around the core model:
- Conversion pipeline (stream and file level)
- Logging setup
"""

from .pipeline import (
    ConversionSummary,
    convert_stream,
    convert_files,
    open_input,
    open_output,
)
from .logging_setup import (
    LOG_FORMAT,
    resolve_log_level,
    setup_logging,
)

__all__ = [
    # Pipeline
    "ConversionSummary",
    "convert_stream",
    "convert_files",
    "open_input",
    "open_output",
    # Logging
    "LOG_FORMAT",
    "resolve_log_level",
    "setup_logging",
]
