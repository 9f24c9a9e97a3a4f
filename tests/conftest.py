#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWire v0.1.0

Pytest configuration and shared fixtures.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import struct

import pytest
from pathlib import Path
import tempfile
import shutil

from contigwire.assembly_core import Assembly, Connection, Contig


REFERENCE_SEQUENCE = (
    "AATTTGCAAAAGGCCTAATAATCGGCAGAGTTGGTGCCTCTGGAGGTGAGTGTGAGGGGGATCTAATAAAAGAAGGTTTA"
    "ACTGAAGTCTTTTAAGAAACAGGATTTTCACATCTAGTAATGTGACTCTTTTACTGAAATAACTAAAAATGCAGGAATCC"
)


def build_assembly_buffer(contigs, pool_padding=0):
    """
    Build an engine output buffer the way the engine lays it out.

    Args:
        contigs: List of (sequence, coverage, n_reads, connections) tuples,
                 connections being (overlap_len, is_rc, target_id, is_target_rc)
        pool_padding: Extra bytes between the header region and the pool
    """
    headers = b""
    pool = b""
    for sequence, coverage, n_reads, connections in contigs:
        headers += struct.pack('=iii', len(sequence), n_reads, len(connections))
        for overlap_len, is_rc, target_id, is_target_rc in connections:
            headers += struct.pack(
                '=II',
                overlap_len | (0x80000000 if is_rc else 0),
                target_id | (0x80000000 if is_target_rc else 0),
            )
        pool += sequence + coverage
    pool_offset = 8 + len(headers) + pool_padding
    return struct.pack('=ii', len(contigs), pool_offset) + headers + b"\x00" * pool_padding + pool


def make_assembly(lengths):
    """Build an Assembly of unconnected contigs with the given lengths."""
    return Assembly([Contig(b"A" * n, b"\x01" * n, 1) for n in lengths])


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="contigwire_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def reference_sequence():
    """Known contig sequence used for round-trip tests."""
    return REFERENCE_SEQUENCE


@pytest.fixture
def tiled_reads():
    """Overlapping 40bp reads tiling the reference with a 10bp step."""
    return [REFERENCE_SEQUENCE[i:i + 40] for i in range(0, len(REFERENCE_SEQUENCE) - 39, 10)]


@pytest.fixture
def two_contig_buffer():
    """
    Engine output for two contigs joined by one overlap.

    tig0 -> tig1 (successor side, into the reverse complement of tig1,
    5bp overlap) and the same overlap seen from tig1.
    """
    return build_assembly_buffer([
        (b"ACGTACGTAC", b"\x03" * 10, 3, [(5, False, 1, True)]),
        (b"GGGCCCAAAT", b"\x02" * 10, 2, [(5, True, 0, False)]),
    ])


@pytest.fixture
def two_contig_assembly():
    """Two contigs with one physical overlap recorded on both ends."""
    first = Contig(b"ACGTACGTAC", b"\x03" * 10, 3)
    second = Contig(b"GGGCCCAAAT", b"\x02" * 10, 2)
    forward = Connection(target_id=1, overlap_len=5, is_rc=False, is_target_rc=True)
    first.set_connections([forward])
    second.set_connections([forward.rc_connection(0)])
    return Assembly([first, second])


@pytest.fixture
def buffer_builder():
    """Factory for synthetic engine output buffers."""
    return build_assembly_buffer


@pytest.fixture
def assembly_of_lengths():
    """Factory for assemblies of unconnected contigs."""
    return make_assembly
