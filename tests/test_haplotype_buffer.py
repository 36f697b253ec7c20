#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Microsat v0.1.0

Tests for the growable haplotype buffer.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

import numpy as np
import pytest

from microsat.errors import AllocationError
from microsat.io import haplotype_buffer
from microsat.io.haplotype_buffer import (
    DEFAULT_CAPACITY,
    GROWTH_PADDING,
    HaplotypeBuffer,
)


class TestCapacity:
    """Growth rules for ensure_capacity."""

    def test_initial_capacity(self):
        buffer = HaplotypeBuffer(4)
        assert buffer.capacity == DEFAULT_CAPACITY == 1000
        assert buffer.n_samples == 4

    def test_smaller_request_is_noop(self):
        buffer = HaplotypeBuffer(2)
        assert buffer.ensure_capacity(999) is False
        assert buffer.capacity == 1000

    def test_request_equal_to_capacity_grows(self):
        buffer = HaplotypeBuffer(2)
        assert buffer.ensure_capacity(1000) is True
        assert buffer.capacity == 1000 + GROWTH_PADDING

    def test_growth_is_idempotent(self):
        buffer = HaplotypeBuffer(2, capacity=5)
        buffer.ensure_capacity(20)
        assert buffer.capacity == 30
        for _ in range(3):
            assert buffer.ensure_capacity(20) is False
            assert buffer.capacity == 30

    def test_capacity_never_shrinks(self):
        buffer = HaplotypeBuffer(3, capacity=5)
        seen = []
        for segsites in [2, 40, 7, 0, 39, 50, 3]:
            buffer.ensure_capacity(segsites)
            seen.append(buffer.capacity)
        assert seen == sorted(seen)
        assert buffer.capacity == 60

    def test_growth_preserves_contents(self):
        buffer = HaplotypeBuffer(2, capacity=4)
        buffer.store(0, '1011')
        buffer.store(1, '0100')
        buffer.ensure_capacity(4)
        assert buffer.capacity == 14
        np.testing.assert_array_equal(buffer.view(4), [[1, 0, 1, 1], [0, 1, 0, 0]])

    def test_allocation_failure(self, monkeypatch):
        buffer = HaplotypeBuffer(2, capacity=4)

        def fail(*args, **kwargs):
            raise MemoryError()

        monkeypatch.setattr(haplotype_buffer.np, 'zeros', fail)
        with pytest.raises(AllocationError):
            buffer.ensure_capacity(10)
        # A failed growth leaves the buffer as it was
        assert buffer.capacity == 4

    def test_size_past_array_limit(self):
        buffer = HaplotypeBuffer(2, capacity=4)
        with pytest.raises(AllocationError, match="cannot allocate"):
            buffer.ensure_capacity(10 ** 20)
        assert buffer.capacity == 4

    def test_invalid_sample_count(self):
        with pytest.raises(ValueError):
            HaplotypeBuffer(0)


class TestStore:
    """Storing and viewing haplotype rows."""

    def test_store_and_view(self):
        buffer = HaplotypeBuffer(3, capacity=10)
        for row, hap in enumerate(['10', '01', '11']):
            buffer.store(row, hap)
        view = buffer.view(2)
        assert view.shape == (3, 2)
        np.testing.assert_array_equal(view, [[1, 0], [0, 1], [1, 1]])

    def test_empty_view(self):
        buffer = HaplotypeBuffer(3)
        assert buffer.view(0).shape == (3, 0)

    def test_store_rejects_non_binary(self):
        buffer = HaplotypeBuffer(1, capacity=10)
        with pytest.raises(ValueError, match="other than"):
            buffer.store(0, '0120')

    def test_store_rejects_overlong(self):
        buffer = HaplotypeBuffer(1, capacity=3)
        with pytest.raises(ValueError, match="exceeds"):
            buffer.store(0, '0101')

    def test_store_rejects_bad_row(self):
        buffer = HaplotypeBuffer(2, capacity=3)
        with pytest.raises(IndexError):
            buffer.store(2, '010')

    def test_view_beyond_capacity(self):
        buffer = HaplotypeBuffer(2, capacity=3)
        with pytest.raises(ValueError):
            buffer.view(4)

# Microsat v0.1.0
# Any usage is subject to this software's license.
