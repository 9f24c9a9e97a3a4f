#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Read input for ContigWire.

Loads FASTQ/FASTA files (optionally gzipped) through Biopython and projects
each record onto the engine's read representation: upper-case base bytes
and Phred+33 quality bytes.
"""

import gzip
import logging
from pathlib import Path
from typing import Iterator, List, Optional, TextIO, Union

from Bio import SeqIO
from Bio.SeqRecord import SeqRecord

from ..assembly_core.data_structures import PHRED_OFFSET, Read

logger = logging.getLogger(__name__)

FASTQ_SUFFIXES = ('.fastq', '.fq')
FASTA_SUFFIXES = ('.fasta', '.fa', '.fna', '.fas')


def is_gzipped(filepath: Union[str, Path]) -> bool:
    """Check if file is gzip compressed (by suffix)."""
    return Path(filepath).suffix in ('.gz', '.gzip')


def open_file(filepath: Union[str, Path]) -> TextIO:
    """Open a text file for reading with automatic gzip detection."""
    filepath = Path(filepath)
    if is_gzipped(filepath):
        return gzip.open(filepath, 'rt')
    return open(filepath, 'r')


def detect_format(filepath: Union[str, Path]) -> str:
    """
    Guess 'fastq' or 'fasta' from the file name.

    Raises:
        ValueError: If the suffix is not a known sequence format
    """
    filepath = Path(filepath)
    suffix = filepath.suffixes[-2] if is_gzipped(filepath) and len(filepath.suffixes) > 1 else filepath.suffix
    suffix = suffix.lower()
    if suffix in FASTQ_SUFFIXES:
        return 'fastq'
    if suffix in FASTA_SUFFIXES:
        return 'fasta'
    raise ValueError(f"Cannot infer sequence format from file name: {filepath.name}")


def record_to_read(record: SeqRecord, default_quality: int = 30) -> Read:
    """
    Project a Biopython record onto a Read.

    FASTQ records keep their Phred scores (re-encoded as Phred+33 bytes);
    FASTA records get `default_quality` on every base.
    """
    bases = str(record.seq).upper().encode('ascii')
    phred = record.letter_annotations.get("phred_quality")
    if phred is None:
        phred = [default_quality] * len(bases)
    quals = bytes(q + PHRED_OFFSET for q in phred)
    return Read(bases, quals)


def read_sequences(
    filepath: Union[str, Path],
    file_format: Optional[str] = None,
    default_quality: int = 30,
    min_length: int = 0,
) -> Iterator[Read]:
    """
    Read a FASTQ/FASTA file and yield Read objects.

    Args:
        filepath: Path to the reads file (can be gzipped)
        file_format: 'fastq' or 'fasta' (None = infer from the file name)
        default_quality: Phred score assigned to FASTA bases
        min_length: Skip reads shorter than this

    Yields:
        Read objects in file order
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Reads file not found: {filepath}")

    file_format = file_format or detect_format(filepath)
    with open_file(filepath) as handle:
        for record in SeqIO.parse(handle, file_format):
            if len(record.seq) < min_length:
                continue
            yield record_to_read(record, default_quality)


def load_reads(filepath: Union[str, Path], **kwargs) -> List[Read]:
    """Materialise read_sequences() into a list and log the totals."""
    reads = list(read_sequences(filepath, **kwargs))
    total_bases = sum(len(read) for read in reads)
    logger.info(f"Loaded {len(reads):,} reads ({total_bases:,} bp) from {filepath}")
    return reads
