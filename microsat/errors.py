#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Microsat v0.1.0

Exception hierarchy for Microsat.

Every failure is fatal: nothing in the package retries or resynchronizes.
The CLI catches MicrosatError, prints a diagnostic and exits non-zero.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

from typing import Optional


class MicrosatError(Exception):
    """Base class for all Microsat errors."""
    pass


class ConfigurationError(MicrosatError):
    """Raised when run configuration is missing, malformed or inconsistent."""
    pass


class StreamFormatError(MicrosatError):
    """
    Raised when the ms input stream ends early or holds a malformed field.
    
    Attributes:
        line_number: 1-based input line where parsing failed (if known)
    """
    
    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} (input line {line_number})"
        super().__init__(message)


class AllocationError(MicrosatError):
    """Raised when the haplotype buffer cannot be grown."""
    pass

# Microsat v0.1.0
# Any usage is subject to this software's license.
