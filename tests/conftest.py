#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Microsat v0.1.0

Pytest configuration and shared fixtures.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

import io

import pytest
from pathlib import Path
import tempfile
import shutil


# Three samples, two datasets: one with two sites, one with none
MS_TWO_DATASETS = """ms 3 2 -t 1.0
1234 5678 9012

//
segsites: 2
positions: 0.1000 0.5000
10
01
11

//
segsites: 0

"""

# Draws that make site 0 a +1 step and site 1 a -1 step
PLUS_THEN_MINUS_DRAWS = [0.7, 0.3, 0.2, 0.9]


@pytest.fixture
def ms_text():
    """ms output with three samples and two datasets."""
    return MS_TWO_DATASETS


@pytest.fixture
def ms_stream():
    """ms output as a text stream."""
    return io.StringIO(MS_TWO_DATASETS)


@pytest.fixture
def plus_minus_draws():
    """Uniform draws giving site 0 a +1 step and site 1 a -1 step."""
    return list(PLUS_THEN_MINUS_DRAWS)


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="microsat_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)

# Microsat v0.1.0
# Any usage is subject to this software's license.
