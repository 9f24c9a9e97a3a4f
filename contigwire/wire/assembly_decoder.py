#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWire v0.1.0

Assembly decoder — rebuilds the contig graph from the engine's output buffer.

Layout (host-native byte order):

    int32   contig count
    int32   byte offset of the sequence pool (from buffer start)
    per contig (header region, contiguous):
        int32   sequence length
        int32   supporting read count
        int32   connection count
        per connection:
            int32   overlap length   (top bit: is_rc)
            int32   target contig id (top bit: is_target_rc)
    at the pool offset, per contig in header order:
        bytes[len]  sequence
        bytes[len]  per-base coverage

Headers and sequence bytes live in separate regions, so decoding walks two
cursors over the same immutable buffer: one through the headers and one
through the pool. Connections are wired in a second header pass, once every
contig they may point at exists.

The top bit of the overlap field is always the is_rc flag. Gap lengths
(negative overlaps) cannot be represented in the same field and are not
recovered; the magnitude is the low 31 bits.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import List, Optional, Tuple, Union
import logging
import struct

from ..assembly_core.data_structures import Assembly, Connection, Contig
from ..exceptions import AssemblyFailure, DecodeError

logger = logging.getLogger(__name__)

INT32 = struct.Struct('=i')
FILE_HEADER = struct.Struct('=ii')         # contig count, pool offset
CONTIG_HEADER = struct.Struct('=iii')      # seq len, supporting reads, connection count
CONNECTION_RECORD = struct.Struct('=ii')   # encoded overlap, encoded target id

FLAG_MASK = 0x7FFFFFFF

BufferLike = Union[bytes, bytearray, memoryview]


def split_flagged(value: int) -> Tuple[bool, int]:
    """
    Split a signed int32 into its top-bit flag and its low 31 bits.

    Example:
        >>> split_flagged(-2147483643)   # 0x80000005
        (True, 5)
    """
    return value < 0, value & FLAG_MASK


def join_flagged(flag: bool, magnitude: int) -> int:
    """Inverse of split_flagged: set the top bit of a 31-bit magnitude."""
    if not 0 <= magnitude <= FLAG_MASK:
        raise ValueError(f"Magnitude {magnitude} does not fit in 31 bits")
    return magnitude - 0x80000000 if flag else magnitude


class _Cursor:
    """Independent read position over a shared buffer."""

    def __init__(self, view: memoryview, position: int):
        self.view = view
        self.position = position

    def unpack(self, layout: struct.Struct, what: str) -> tuple:
        if self.position + layout.size > len(self.view):
            raise DecodeError(
                f"Buffer truncated reading {what}: need {layout.size} bytes, "
                f"{len(self.view) - self.position} left",
                offset=self.position,
            )
        values = layout.unpack_from(self.view, self.position)
        self.position += layout.size
        return values

    def take(self, length: int, what: str) -> bytes:
        end = self.position + length
        if end > len(self.view):
            raise DecodeError(
                f"Buffer truncated reading {what}: need {length} bytes, "
                f"{len(self.view) - self.position} left",
                offset=self.position,
            )
        data = self.view[self.position:end].tobytes()
        self.position = end
        return data

    def skip(self, length: int) -> None:
        self.position += length


class AssemblyDecoder:
    """
    Decoder for one engine output buffer.

    The buffer is never modified; decode() may be called repeatedly and
    always yields an equivalent, independent Assembly.
    """

    def __init__(self, buffer: BufferLike):
        self.view = memoryview(buffer).cast('B')
        self.contig_count, self.pool_offset = self._read_file_header()

    def _read_file_header(self) -> Tuple[int, int]:
        n_contigs, pool_offset = _Cursor(self.view, 0).unpack(FILE_HEADER, "file header")
        if n_contigs < 0:
            raise DecodeError(f"Negative contig count {n_contigs}", offset=0)
        if not FILE_HEADER.size <= pool_offset <= len(self.view):
            raise DecodeError(
                f"Sequence pool offset {pool_offset} outside buffer of {len(self.view)} bytes",
                offset=INT32.size,
            )
        return n_contigs, pool_offset

    def _read_contig_header(self, cursor: _Cursor, idx: int) -> Tuple[int, int, int]:
        start = cursor.position
        seq_len, n_reads, n_connections = cursor.unpack(CONTIG_HEADER, f"contig {idx} header")
        if seq_len < 0:
            raise DecodeError(f"Contig {idx}: negative sequence length {seq_len}", offset=start)
        if n_connections < 0:
            raise DecodeError(
                f"Contig {idx}: negative connection count {n_connections}",
                offset=start + 2 * INT32.size,
            )
        return seq_len, n_reads, n_connections

    def build_contigs(self) -> List[Contig]:
        """First pass: contigs with sequence and coverage, no connections."""
        headers = _Cursor(self.view, FILE_HEADER.size)
        pool = _Cursor(self.view, self.pool_offset)
        contigs: List[Contig] = []

        for idx in range(self.contig_count):
            seq_len, n_reads, n_connections = self._read_contig_header(headers, idx)
            headers.skip(CONNECTION_RECORD.size * n_connections)
            if headers.position > self.pool_offset:
                raise DecodeError(
                    f"Contig {idx}: header region overruns sequence pool at {self.pool_offset}",
                    offset=headers.position,
                )
            sequence = pool.take(seq_len, f"contig {idx} sequence")
            coverage = pool.take(seq_len, f"contig {idx} coverage")
            contigs.append(Contig(sequence, coverage, n_reads))

        return contigs

    def wire_connections(self, contigs: List[Contig]) -> None:
        """Second pass: attach each contig's connections in encounter order."""
        headers = _Cursor(self.view, FILE_HEADER.size)
        n_contigs = len(contigs)

        for idx, contig in enumerate(contigs):
            _, _, n_connections = self._read_contig_header(headers, idx)
            connections = []
            for _ in range(n_connections):
                record_offset = headers.position
                overlap_encoded, target_encoded = headers.unpack(
                    CONNECTION_RECORD, f"contig {idx} connection"
                )
                is_rc, overlap_len = split_flagged(overlap_encoded)
                is_target_rc, target_id = split_flagged(target_encoded)
                if target_id >= n_contigs:
                    raise DecodeError(
                        f"Contig {idx}: connection targets contig {target_id} "
                        f"but the assembly has {n_contigs} contigs",
                        offset=record_offset + INT32.size,
                    )
                connections.append(Connection(target_id, overlap_len, is_rc, is_target_rc))
            contig.set_connections(connections)

    def decode(self) -> Assembly:
        contigs = self.build_contigs()
        self.wire_connections(contigs)
        assembly = Assembly(contigs)
        logger.debug(
            f"Decoded {assembly.contig_count()} contigs, "
            f"{assembly.connection_count()} connections from {len(self.view)} bytes"
        )
        return assembly


def decode_assembly(buffer: Optional[BufferLike]) -> Assembly:
    """
    Decode an engine output buffer into an Assembly.

    Args:
        buffer: Engine output; None or an empty buffer means the engine
                produced no assembly

    Returns:
        Assembly with all connections wired

    Raises:
        AssemblyFailure: If the engine signalled that assembly failed
        DecodeError: If the buffer violates the layout
    """
    if buffer is None or len(buffer) == 0:
        raise AssemblyFailure("Unable to create assembly.")
    return AssemblyDecoder(buffer).decode()

# ContigWire v0.1.0
# Any usage is subject to this software's license.
