#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Microsat v0.1.0

Version information.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

__version__ = "0.1.0"

# Microsat v0.1.0
# Any usage is subject to this software's license.
