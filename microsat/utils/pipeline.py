#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Microsat v0.1.0

Conversion pipeline: ms output in, microsatellite repeat lengths out.

Datasets are handled strictly one at a time: each is read, mutated and
written (and flushed) before the next one is read.

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

import gzip
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, TextIO, Union

from ..config.settings import RunConfig
from ..io.haplotype_buffer import HaplotypeBuffer
from ..io.ms_reader import MsDatasetReader, read_header
from ..io.output_formatter import OutputFormatter
from ..simulation.mutation_engine import MutationEngine
from ..simulation.random_source import NumpyUniformSource, UniformSource

logger = logging.getLogger(__name__)

STDIO_PATH = '-'


@dataclass
class ConversionSummary:
    """
    Counts collected over one conversion run.
    
    Attributes:
        n_samples: Haplotypes per dataset
        datasets: Datasets converted
        segregating_sites: Total sites (mutations) across all datasets
        lines_written: Output lines written
        buffer_capacity: Final haplotype buffer capacity
        elapsed_seconds: Wall-clock time of the run
    """
    n_samples: int = 0
    datasets: int = 0
    segregating_sites: int = 0
    lines_written: int = 0
    buffer_capacity: int = 0
    elapsed_seconds: float = 0.0
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def convert_stream(instream: TextIO, outstream: TextIO, config: RunConfig,
                   source: Optional[UniformSource] = None) -> ConversionSummary:
    """
    Convert a full ms run read from ``instream``.
    
    Args:
        instream: ms output, positioned at the command line
        outstream: Destination for repeat-length blocks
        config: Validated run settings
        source: Uniform random source (seeded from config.seed if None)
    
    Returns:
        ConversionSummary for the run
    
    Raises:
        StreamFormatError: On malformed or truncated input
        AllocationError: If the haplotype buffer cannot grow
    """
    start = time.time()
    if source is None:
        source = NumpyUniformSource(config.seed)
    
    header = read_header(instream)
    logger.info(
        f"Converting {header.n_datasets} datasets of {header.n_samples} samples "
        f"({config.loci} loci, ancestral state {config.ancestral_state}, "
        f"{config.output_mode.value} output)"
    )
    
    buffer = HaplotypeBuffer(header.n_samples)
    reader = MsDatasetReader(instream, header.n_samples, buffer, line_number=header.lines_read)
    engine = MutationEngine(config, source)
    formatter = OutputFormatter(outstream, config.output_mode)
    
    summary = ConversionSummary(n_samples=header.n_samples)
    for dataset in reader.iter_datasets(header.n_datasets):
        lengths = engine.simulate(dataset)
        formatter.write(lengths)
        summary.datasets += 1
        summary.segregating_sites += dataset.segsites
    
    summary.lines_written = formatter.lines_written
    summary.buffer_capacity = buffer.capacity
    summary.elapsed_seconds = time.time() - start
    
    logger.info(
        f"Converted {summary.datasets} datasets "
        f"({summary.segregating_sites} segregating sites) "
        f"in {summary.elapsed_seconds:.2f}s"
    )
    return summary


@contextmanager
def open_input(path: Union[str, Path]) -> Iterator[TextIO]:
    """Open ms input; '-' is stdin and '.gz' files are decompressed."""
    if str(path) == STDIO_PATH:
        yield sys.stdin
        return
    
    path = Path(path)
    if path.suffix == '.gz':
        handle = gzip.open(path, 'rt', encoding='utf-8')
    else:
        handle = open(path, 'r', encoding='utf-8')
    with handle:
        yield handle


@contextmanager
def open_output(path: Union[str, Path]) -> Iterator[TextIO]:
    """Open the output destination; '-' is stdout."""
    if str(path) == STDIO_PATH:
        yield sys.stdout
        return
    
    with open(path, 'w') as handle:
        yield handle


def convert_files(input_path: Union[str, Path], output_path: Union[str, Path],
                  config: RunConfig,
                  source: Optional[UniformSource] = None) -> ConversionSummary:
    """
    Convert ms output between files ('-' for stdin/stdout).
    
    Args:
        input_path: ms output file, '.gz' allowed
        output_path: Repeat-length output file
        config: Validated run settings
        source: Uniform random source (seeded from config.seed if None)
    
    Returns:
        ConversionSummary for the run
    """
    logger.debug(f"Input: {input_path}, output: {output_path}")
    with open_input(input_path) as instream, open_output(output_path) as outstream:
        return convert_stream(instream, outstream, config, source)

# Microsat v0.1.0
# Any usage is subject to this software's license.
