"""
Microsat v0.1.0

Text rendering of repeat-length matrices.

Two layouts are supported:
- flat: one line per dataset holding every individual's length at locus 0,
  then every individual's length at locus 1, and so on
- per_individual: one line per individual with its locus lengths, followed
  by a '//' line closing the dataset

Author: Microsat Development Team
License: GNU General Public License v3 or later
"""

from typing import List, TextIO, Union

import numpy as np

from ..config.settings import OutputMode, parse_output_mode

DATASET_SEPARATOR = '//'


def format_flat(lengths: np.ndarray) -> List[str]:
    """
    Render an individuals x loci matrix as a single locus-major line.
    
    Example:
        >>> format_flat(np.array([[1, 4], [2, 5], [3, 6]]))
        ['1\\t2\\t3\\t4\\t5\\t6']
    """
    return ['\t'.join(str(int(value)) for value in lengths.T.ravel())]


def format_per_individual(lengths: np.ndarray) -> List[str]:
    """
    Render an individuals x loci matrix as one line per individual plus '//'.
    
    Example:
        >>> format_per_individual(np.array([[1, 4], [2, 5]]))
        ['1\\t4', '2\\t5', '//']
    """
    lines = ['\t'.join(str(int(value)) for value in row) for row in lengths]
    lines.append(DATASET_SEPARATOR)
    return lines


class OutputFormatter:
    """Write each dataset's repeat lengths to a text stream as one block."""
    
    def __init__(self, stream: TextIO, mode: Union[OutputMode, str] = OutputMode.FLAT):
        self.stream = stream
        self.mode = parse_output_mode(mode)
        self.blocks_written = 0
        self.lines_written = 0
    
    def format(self, lengths: np.ndarray) -> List[str]:
        if self.mode is OutputMode.PER_INDIVIDUAL:
            return format_per_individual(lengths)
        return format_flat(lengths)
    
    def write(self, lengths: np.ndarray) -> int:
        """
        Write one dataset block and flush it.
        
        Returns:
            Number of lines written
        """
        lines = self.format(lengths)
        for line in lines:
            self.stream.write(line + '\n')
        self.stream.flush()
        
        self.blocks_written += 1
        self.lines_written += len(lines)
        return len(lines)

# Microsat v0.1.0
# Any usage is subject to this software's license.
