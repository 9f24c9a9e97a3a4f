#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWire v0.1.0

Tests for decoding engine output buffers.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import struct

import pytest

from contigwire.assembly_core import Read
from contigwire.exceptions import AssemblyFailure, DecodeError
from contigwire.wire import (
    AssemblyDecoder,
    decode_assembly,
    encode_reads,
    join_flagged,
    split_flagged,
)


class TestRoundTrip:
    """Test encoding reads and decoding a matching engine answer."""

    def test_single_contig_reconstructs_reference(self, reference_sequence, tiled_reads, buffer_builder):
        """Test a one-contig answer yields the reference byte for byte."""
        read_data = encode_reads(tiled_reads, Read.with_constant_quality)
        assert struct.unpack_from('=i', read_data)[0] == len(tiled_reads)

        reference = reference_sequence.encode('ascii')
        engine_output = buffer_builder([
            (reference, b"\x05" * len(reference), len(tiled_reads), []),
        ])

        assembly = decode_assembly(engine_output)

        assert assembly.contig_count() == 1
        contig = assembly.contig(0)
        assert contig.sequence == reference
        assert contig.per_base_coverage == b"\x05" * len(reference)
        assert contig.supporting_read_count == len(tiled_reads)
        assert contig.connections == ()


class TestContigsAndConnections:
    """Test contig construction and connection wiring."""

    def test_two_contigs(self, two_contig_buffer):
        """Test both contigs and their connections are decoded."""
        assembly = decode_assembly(two_contig_buffer)

        assert assembly.contig_count() == 2
        first, second = assembly.contig(0), assembly.contig(1)
        assert first.sequence == b"ACGTACGTAC"
        assert second.sequence == b"GGGCCCAAAT"
        assert first.supporting_read_count == 3
        assert second.per_base_coverage == b"\x02" * 10

        (forward,) = first.connections
        assert forward.target_id == 1
        assert forward.overlap_len == 5
        assert forward.is_rc is False
        assert forward.is_target_rc is True
        assert assembly.target_of(forward) is second

        (backward,) = second.connections
        assert backward.target_id == 0
        assert backward.is_rc is True
        assert backward.is_target_rc is False

    def test_top_bit_is_orientation_flag(self, buffer_builder):
        """Test the sign bit never leaks into overlap or target."""
        data = buffer_builder([
            (b"AC", b"\x01\x01", 1, [(0x7FFFFFFF, True, 0, True)]),
        ])

        (conn,) = decode_assembly(data).contig(0).connections

        assert conn.is_rc is True
        assert conn.is_target_rc is True
        assert conn.overlap_len == 0x7FFFFFFF
        assert conn.target_id == 0

    def test_self_loop(self, buffer_builder):
        """Test a contig may connect to itself."""
        data = buffer_builder([(b"ACGTA", b"\x01" * 5, 2, [(3, False, 0, False)])])

        assembly = decode_assembly(data)

        assert assembly.target_of(assembly.contig(0).connections[0]) is assembly.contig(0)

    def test_connection_order_preserved(self, buffer_builder):
        """Test connections keep their encounter order."""
        data = buffer_builder([
            (b"AAAA", b"\x01" * 4, 1, [(1, False, 2, False), (2, True, 1, False), (3, False, 1, True)]),
            (b"CCCC", b"\x01" * 4, 1, []),
            (b"GGGG", b"\x01" * 4, 1, []),
        ])

        conns = decode_assembly(data).contig(0).connections

        assert [c.overlap_len for c in conns] == [1, 2, 3]
        assert [c.target_id for c in conns] == [2, 1, 1]

    def test_pool_located_by_offset(self, buffer_builder):
        """Test the pool is read at its declared offset, not after the headers."""
        data = buffer_builder([
            (b"ACG", b"\x07\x08\x09", 1, []),
            (b"TT", b"\x01\x02", 1, []),
        ], pool_padding=12)

        assembly = decode_assembly(data)

        assert assembly.contig(0).sequence == b"ACG"
        assert assembly.contig(0).per_base_coverage == b"\x07\x08\x09"
        assert assembly.contig(1).sequence == b"TT"

    def test_empty_assembly(self):
        """Test a zero-contig buffer decodes to an empty assembly."""
        assembly = decode_assembly(struct.pack('=ii', 0, 8))

        assert assembly.contig_count() == 0
        assert assembly.compute_size_statistic() == 0

    def test_decode_is_repeatable(self, two_contig_buffer):
        """Test decoding twice yields independent, equivalent assemblies."""
        decoder = AssemblyDecoder(two_contig_buffer)

        first = decoder.decode()
        second = decoder.decode()

        assert first.contig(0) is not second.contig(0)
        assert first.contig(0).sequence == second.contig(0).sequence
        assert first.contig(1).connections == second.contig(1).connections


class TestFailures:
    """Test engine failure and malformed buffers."""

    @pytest.mark.parametrize("signal", [None, b"", bytearray()])
    def test_no_output_is_assembly_failure(self, signal):
        """Test an absent or empty buffer means the engine failed."""
        with pytest.raises(AssemblyFailure):
            decode_assembly(signal)

    def test_target_out_of_range(self, buffer_builder):
        """Test a target index past the last contig raises DecodeError."""
        data = buffer_builder([
            (b"AC", b"\x01\x01", 1, []),
            (b"GT", b"\x01\x01", 1, [(4, False, 2, False)]),
        ])

        with pytest.raises(DecodeError) as excinfo:
            decode_assembly(data)

        # second contig header starts at 8 + 12; its record's target field 4 bytes later
        assert excinfo.value.offset == 8 + 12 + 12 + 4
        assert "contig 2" in str(excinfo.value)

    def test_target_out_of_range_with_flag(self, buffer_builder):
        """Test the range check applies after removing the flag bit."""
        data = buffer_builder([(b"AC", b"\x01\x01", 1, [(4, False, 1, True)])])

        with pytest.raises(DecodeError):
            decode_assembly(data)

    def test_truncated_header(self):
        """Test a buffer too short for its file header."""
        with pytest.raises(DecodeError):
            decode_assembly(b"\x01\x00")

    def test_truncated_pool(self, buffer_builder):
        """Test sequence bytes missing from the pool."""
        data = buffer_builder([(b"ACGT", b"\x01" * 4, 1, [])])

        with pytest.raises(DecodeError, match="truncated"):
            decode_assembly(data[:-3])

    def test_negative_contig_count(self):
        """Test a negative contig count is rejected."""
        with pytest.raises(DecodeError) as excinfo:
            decode_assembly(struct.pack('=ii', -1, 8))

        assert excinfo.value.offset == 0

    def test_pool_offset_outside_buffer(self):
        """Test a pool offset past the buffer end is rejected."""
        with pytest.raises(DecodeError):
            decode_assembly(struct.pack('=ii', 0, 64))

    def test_headers_overrun_pool(self):
        """Test headers that run into the declared pool are rejected."""
        data = struct.pack('=ii', 1, 8) + struct.pack('=iii', 0, 1, 0)

        with pytest.raises(DecodeError, match="overruns"):
            decode_assembly(data)


class TestFlagHelpers:
    """Test top-bit flag packing."""

    def test_split(self):
        assert split_flagged(5) == (False, 5)
        assert split_flagged(-2147483643) == (True, 5)
        assert split_flagged(-1) == (True, 0x7FFFFFFF)

    def test_join_inverts_split(self):
        for flag in (False, True):
            for magnitude in (0, 1, 12345, 0x7FFFFFFF):
                assert split_flagged(join_flagged(flag, magnitude)) == (flag, magnitude)

    def test_join_rejects_wide_magnitude(self):
        with pytest.raises(ValueError):
            join_flagged(False, 0x80000000)

# ContigWire v0.1.0
# Any usage is subject to this software's license.
