"""
Microsat I/O module.

Handles reading ms simulator output and writing repeat-length data.

MODULES:
- haplotype_buffer.py: Growable per-individual allele storage
- ms_reader.py: Streaming ms header/dataset parser
- output_formatter.py: Flat and per-individual text layouts
"""

from .haplotype_buffer import (
    HaplotypeBuffer,
    DEFAULT_CAPACITY,
    GROWTH_PADDING,
)
from .ms_reader import (
    MsHeader,
    Dataset,
    ReaderState,
    MsDatasetReader,
    read_header,
)
from .output_formatter import (
    OutputFormatter,
    format_flat,
    format_per_individual,
)

__all__ = [
    # Buffer
    "HaplotypeBuffer",
    "DEFAULT_CAPACITY",
    "GROWTH_PADDING",
    
    # Reader
    "MsHeader",
    "Dataset",
    "ReaderState",
    "MsDatasetReader",
    "read_header",
    
    # Output
    "OutputFormatter",
    "format_flat",
    "format_per_individual",
]
