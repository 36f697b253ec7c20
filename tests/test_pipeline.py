#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Microsat v0.1.0

End-to-end tests for the conversion pipeline.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

import gzip
import io
import logging

import pytest

from microsat.config.settings import RunConfig
from microsat.errors import StreamFormatError
from microsat.simulation.random_source import SequenceUniformSource
from microsat.utils.logging_setup import resolve_log_level
from microsat.utils.pipeline import convert_files, convert_stream


class TestConvertStream:
    """Header, datasets and output in one pass."""

    def test_flat_output(self, ms_stream, plus_minus_draws):
        out = io.StringIO()
        summary = convert_stream(
            ms_stream, out, RunConfig(ancestral_state=20),
            SequenceUniformSource(plus_minus_draws),
        )
        assert out.getvalue() == "21\t19\t20\n20\t20\t20\n"
        assert summary.datasets == 2
        assert summary.segregating_sites == 2
        assert summary.n_samples == 3
        assert summary.lines_written == 2
        assert summary.buffer_capacity == 1000

    def test_per_individual_output(self, ms_stream, plus_minus_draws):
        out = io.StringIO()
        summary = convert_stream(
            ms_stream, out, RunConfig(ancestral_state=20, output_mode='per_individual'),
            SequenceUniformSource(plus_minus_draws),
        )
        assert out.getvalue() == "21\n19\n20\n//\n20\n20\n20\n//\n"
        # N + 1 lines per dataset
        assert summary.lines_written == 2 * (3 + 1)

    def test_linked_loci(self, ms_stream):
        out = io.StringIO()
        config = RunConfig(ancestral_state=20, loci=2, thetas=(0.4, 0.6), output_mode='per_individual')
        convert_stream(ms_stream, out, config, SequenceUniformSource([0.7, 0.3, 0.2, 0.5]))
        assert out.getvalue() == "21\t20\n20\t19\n21\t19\n//\n20\t20\n20\t20\n20\t20\n//\n"

    def test_linked_loci_flat(self, ms_stream):
        out = io.StringIO()
        config = RunConfig(ancestral_state=20, loci=2, thetas=(0.4, 0.6))
        convert_stream(ms_stream, out, config, SequenceUniformSource([0.7, 0.3, 0.2, 0.5]))
        lines = out.getvalue().splitlines()
        assert lines[0] == "21\t20\t21\t20\t19\t19"
        assert lines[1] == "\t".join(["20"] * 6)

    def test_seeded_runs_match(self, ms_text):
        config = RunConfig(ancestral_state=10, loci=2, thetas=(0.5, 0.5), seed=2024)
        outputs = []
        for _ in range(2):
            out = io.StringIO()
            convert_stream(io.StringIO(ms_text), out, config)
            outputs.append(out.getvalue())
        assert outputs[0] == outputs[1]

    def test_zero_datasets(self):
        out = io.StringIO()
        summary = convert_stream(io.StringIO("ms 4 0 -t 1.0\n1 2 3\n"), out, RunConfig())
        assert out.getvalue() == ""
        assert summary.datasets == 0

    def test_failure_keeps_completed_blocks_only(self, plus_minus_draws):
        text = (
            "ms 3 2 -t 1.0\n1 2 3\n\n"
            "//\nsegsites: 2\npositions: 0.1 0.5\n10\n01\n11\n\n"
            "//\nsegsites: 2\npositions: 0.2 0.6\n10\n01\n"
        )
        out = io.StringIO()
        with pytest.raises(StreamFormatError, match="dataset 2"):
            convert_stream(io.StringIO(text), out, RunConfig(ancestral_state=20),
                           SequenceUniformSource(plus_minus_draws))
        assert out.getvalue() == "21\t19\t20\n"

    def test_summary_to_dict(self, ms_stream, plus_minus_draws):
        summary = convert_stream(ms_stream, io.StringIO(), RunConfig(),
                                 SequenceUniformSource(plus_minus_draws))
        data = summary.to_dict()
        assert data['datasets'] == 2
        assert 'elapsed_seconds' in data


class TestConvertFiles:
    """File-level conversion."""

    def test_plain_files(self, ms_text, plus_minus_draws, temp_output_dir):
        input_path = temp_output_dir / "sims.ms"
        output_path = temp_output_dir / "msat.dat"
        input_path.write_text(ms_text)

        convert_files(input_path, output_path, RunConfig(ancestral_state=20),
                      SequenceUniformSource(plus_minus_draws))
        assert output_path.read_text() == "21\t19\t20\n20\t20\t20\n"

    def test_gzipped_input(self, ms_text, plus_minus_draws, temp_output_dir):
        input_path = temp_output_dir / "sims.ms.gz"
        output_path = temp_output_dir / "msat.dat"
        with gzip.open(input_path, 'wt') as f:
            f.write(ms_text)

        summary = convert_files(input_path, output_path, RunConfig(ancestral_state=20),
                                SequenceUniformSource(plus_minus_draws))
        assert summary.datasets == 2
        assert output_path.read_text() == "21\t19\t20\n20\t20\t20\n"

    def test_missing_input(self, temp_output_dir):
        with pytest.raises(OSError):
            convert_files(temp_output_dir / "absent.ms", temp_output_dir / "out.dat", RunConfig())


class TestLogLevels:
    """Effective log level from flags and config."""

    def test_verbose_wins(self):
        assert resolve_log_level(verbose=True, quiet=True, configured='ERROR') == logging.DEBUG

    def test_quiet_over_config(self):
        assert resolve_log_level(quiet=True, configured='DEBUG') == logging.ERROR

    def test_configured_name(self):
        assert resolve_log_level(configured='info') == logging.INFO

    def test_default_and_unknown(self):
        assert resolve_log_level() == logging.WARNING
        assert resolve_log_level(configured='chatty') == logging.WARNING

# Microsat v0.1.0
# Any usage is subject to this software's license.
