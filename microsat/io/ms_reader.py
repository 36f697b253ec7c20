#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Streaming reader for ms coalescent-simulation output.

An ms run starts with two metadata lines: the command line (whose second
and third tokens are the sample size and the number of datasets) and the
random seed record. Each dataset then follows as:

    //
    segsites: 3
    positions: 0.1021 0.4477 0.9012
    010
    110
    ...

Datasets are parsed one at a time; only the current dataset is held in
memory, with haplotypes stored in a shared HaplotypeBuffer.
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Iterator, List, Optional, TextIO

import numpy as np

from ..errors import StreamFormatError
from .haplotype_buffer import HaplotypeBuffer

logger = logging.getLogger(__name__)

DATASET_BOUNDARY = '//'


# =============================================================================
# SECTION 2: DATA STRUCTURES
# =============================================================================

@dataclass
class MsHeader:
    """
    Metadata from the first two lines of an ms run.
    
    Attributes:
        command: First line as written by the simulator
        n_samples: Number of sampled haplotypes per dataset
        n_datasets: Number of datasets that follow
        seed_line: Second line (random seed record), kept verbatim
        lines_read: Number of input lines consumed by the header
    """
    command: str
    n_samples: int
    n_datasets: int
    seed_line: str = ""
    lines_read: int = 2


@dataclass
class Dataset:
    """
    One parsed ms dataset.
    
    Attributes:
        index: 0-based position of the dataset in the input
        segsites: Number of segregating sites
        positions: Site positions (kept for reference, not used by the model)
        haplotypes: n_samples x segsites array of allele states (0 or 1)
        annotation: Value of the optional annotation line, when present
    """
    index: int
    segsites: int
    positions: np.ndarray
    haplotypes: np.ndarray
    annotation: Optional[float] = None
    
    @property
    def n_samples(self) -> int:
        return self.haplotypes.shape[0]
    
    def haplotype_strings(self) -> List[str]:
        """Render each row back to its '0'/'1' string."""
        return [''.join(str(int(state)) for state in row) for row in self.haplotypes]


class ReaderState(Enum):
    """Parser states for one dataset."""
    AWAITING_BOUNDARY = "awaiting_boundary"
    READING_SEGSITES = "reading_segsites"
    READING_ANNOTATION = "reading_annotation"
    READING_POSITIONS = "reading_positions"
    READING_HAPLOTYPES = "reading_haplotypes"
    DONE = "done"


# =============================================================================
# SECTION 3: HEADER
# =============================================================================

def _read_line(stream: TextIO, line_number: int) -> str:
    """
    Read one line, turning decode failures into StreamFormatError.

    A truncated gzip member raises EOFError and undecodable bytes raise
    UnicodeDecodeError; both are reported against ``line_number``.
    """
    try:
        return stream.readline()
    except EOFError as e:
        raise StreamFormatError(f"input ended inside a compressed block: {e}",
                                line_number=line_number)
    except UnicodeDecodeError as e:
        raise StreamFormatError(f"input is not valid UTF-8 text: {e}", line_number=line_number)


def read_header(stream: TextIO) -> MsHeader:
    """
    Read the two leading metadata lines of an ms run.
    
    Args:
        stream: Text stream positioned at the start of ms output
    
    Returns:
        MsHeader with sample size and dataset count
    
    Raises:
        StreamFormatError: If either line is missing or the counts are malformed
    """
    command = _read_line(stream, 1)
    if not command:
        raise StreamFormatError("empty input: missing ms command line", line_number=1)
    
    tokens = command.split()
    if len(tokens) < 3:
        raise StreamFormatError(
            f"ms command line needs sample size and dataset count, got {command.strip()!r}",
            line_number=1,
        )
    
    try:
        n_samples = int(tokens[1])
        n_datasets = int(tokens[2])
    except ValueError:
        raise StreamFormatError(
            f"non-integer sample size or dataset count in {command.strip()!r}",
            line_number=1,
        )
    
    if n_samples < 1:
        raise StreamFormatError(f"sample size must be at least 1, got {n_samples}", line_number=1)
    if n_datasets < 0:
        raise StreamFormatError(f"dataset count must be non-negative, got {n_datasets}", line_number=1)
    
    seed_line = _read_line(stream, 2)
    if not seed_line:
        raise StreamFormatError("missing seed line after ms command line", line_number=2)
    
    logger.debug(f"ms header: {n_samples} samples, {n_datasets} datasets")
    return MsHeader(
        command=command.rstrip('\n'),
        n_samples=n_samples,
        n_datasets=n_datasets,
        seed_line=seed_line.rstrip('\n'),
    )


# =============================================================================
# SECTION 4: DATASET READER
# =============================================================================

class MsDatasetReader:
    """
    Parse ms datasets one at a time from a text stream.
    
    The stream must already be past the header. Lines are read whole and
    split into whitespace-delimited tokens, so fields may be spread over
    lines freely. Any missing or malformed field raises StreamFormatError;
    there is no attempt to resynchronize on the next boundary.
    """
    
    def __init__(self, stream: TextIO, n_samples: int,
                 buffer: Optional[HaplotypeBuffer] = None, line_number: int = 0):
        """
        Initialize reader.
        
        Args:
            stream: Text stream positioned after the ms header
            n_samples: Number of haplotypes in every dataset
            buffer: Haplotype storage (a default-capacity buffer if None)
            line_number: Number of lines already consumed from the stream
        """
        self.stream = stream
        self.n_samples = n_samples
        self.buffer = buffer if buffer is not None else HaplotypeBuffer(n_samples)
        self.line_number = line_number
        self.datasets_read = 0
        self.state = ReaderState.AWAITING_BOUNDARY
        self._tokens: Deque[str] = deque()
        
        if self.buffer.n_samples != n_samples:
            raise ValueError(
                f"buffer holds {self.buffer.n_samples} rows but datasets have {n_samples} samples"
            )
    
    def _readline(self) -> Optional[str]:
        line = _read_line(self.stream, self.line_number + 1)
        if not line:
            return None
        self.line_number += 1
        return line
    
    def _error(self, message: str) -> StreamFormatError:
        return StreamFormatError(
            f"dataset {self.datasets_read + 1}: {message}",
            line_number=self.line_number or None,
        )
    
    def _next_token(self, what: str) -> str:
        while not self._tokens:
            line = self._readline()
            if line is None:
                raise self._error(f"unexpected end of input while reading {what}")
            self._tokens.extend(line.split())
        return self._tokens.popleft()
    
    def _next_int(self, what: str) -> int:
        token = self._next_token(what)
        try:
            return int(token)
        except ValueError:
            raise self._error(f"expected integer {what}, got {token!r}")
    
    def _next_float(self, what: str) -> float:
        token = self._next_token(what)
        try:
            return float(token)
        except ValueError:
            raise self._error(f"expected number for {what}, got {token!r}")
    
    def _seek_boundary(self):
        """Skip lines until one starts with the dataset boundary marker."""
        # Whatever is left of the previous dataset's last line is discarded
        self._tokens.clear()
        while True:
            line = self._readline()
            if line is None:
                raise self._error(f"missing dataset boundary '{DATASET_BOUNDARY}' before end of input")
            if line.startswith(DATASET_BOUNDARY):
                return
    
    def _read_segsites(self) -> int:
        token = self._next_token("segregating site count")
        if token == 'segsites:':
            token = self._next_token("segregating site count")
        try:
            segsites = int(token)
        except ValueError:
            raise self._error(f"expected integer segregating site count, got {token!r}")
        if segsites < 0:
            raise self._error(f"negative segregating site count {segsites}")
        return segsites
    
    def read_dataset(self) -> Dataset:
        """
        Read the next dataset.
        
        Returns:
            Parsed Dataset; its haplotype array is a view into the shared
            buffer and is only valid until the next call
        
        Raises:
            StreamFormatError: On premature end of input or a malformed field
            AllocationError: If the haplotype buffer cannot grow
        """
        self.state = ReaderState.AWAITING_BOUNDARY
        self._seek_boundary()
        
        self.state = ReaderState.READING_SEGSITES
        segsites = self._read_segsites()
        self.buffer.ensure_capacity(segsites)
        
        positions = np.empty(segsites, dtype=np.float64)
        annotation = None
        
        if segsites > 0:
            self.state = ReaderState.READING_ANNOTATION
            label = self._next_token("positions label")
            
            # Heuristic kept as-is: a label whose second character is 'r'
            # (e.g. "prob:") carries one value and is followed by the real
            # positions label
            if len(label) > 1 and label[1] == 'r':
                annotation = self._next_float("annotation value")
                self._next_token("positions label")
            
            self.state = ReaderState.READING_POSITIONS
            for i in range(segsites):
                positions[i] = self._next_float(f"site position {i + 1} of {segsites}")
            
            self.state = ReaderState.READING_HAPLOTYPES
            for row in range(self.n_samples):
                haplotype = self._next_token(f"haplotype {row + 1} of {self.n_samples}")
                if len(haplotype) != segsites:
                    raise self._error(
                        f"haplotype {row + 1} has {len(haplotype)} sites, expected {segsites}"
                    )
                try:
                    self.buffer.store(row, haplotype)
                except ValueError as e:
                    raise self._error(f"haplotype {row + 1}: {e}")
        
        dataset = Dataset(
            index=self.datasets_read,
            segsites=segsites,
            positions=positions,
            haplotypes=self.buffer.view(segsites),
            annotation=annotation,
        )
        self.state = ReaderState.DONE
        self.datasets_read += 1
        
        logger.debug(f"Read dataset {dataset.index + 1}: {segsites} segregating sites")
        return dataset
    
    def iter_datasets(self, count: int) -> Iterator[Dataset]:
        """
        Yield ``count`` datasets in input order.
        
        Each dataset must be consumed before the next is requested, since
        all of them share one haplotype buffer.
        """
        for _ in range(count):
            yield self.read_dataset()

# Microsat v0.1.0
# Any usage is subject to this software's license.
