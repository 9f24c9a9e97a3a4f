#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWire v0.1.0

Read encoder — packs reads into the engine's input buffer.

Layout (host-native byte order):

    int32   read count
    per read:
        bases   (raw bytes) + 0x00
        quals   (raw bytes) + 0x00

The engine finds the end of each field by its NUL terminator, so bases and
quals must not contain 0x00 themselves.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Callable, Iterable, List, Optional, Protocol, Tuple, TypeVar
import logging
import struct

from ..exceptions import InputError

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Native byte order, standard sizes, no padding
READ_COUNT_STRUCT = struct.Struct('=i')
TERMINATOR = b'\x00'


class BasesAndQuals(Protocol):
    """Anything exposing equal-length base and quality byte strings."""

    @property
    def bases(self) -> bytes:
        ...

    @property
    def quals(self) -> bytes:
        ...


def _identity(item):
    return item


def _project(reads: Iterable[T], projection: Callable[[T], BasesAndQuals]) -> List[Tuple[bytes, bytes]]:
    """Apply the projection once per read and check each result."""
    projected = []
    for idx, item in enumerate(reads):
        read = projection(item)
        bases = bytes(read.bases)
        quals = bytes(read.quals)
        if len(bases) != len(quals):
            raise InputError(
                f"Read {idx}: {len(bases)} bases but {len(quals)} quality values"
            )
        if TERMINATOR in bases or TERMINATOR in quals:
            raise InputError(f"Read {idx}: embedded NUL byte in bases or quals")
        projected.append((bases, quals))
    return projected


def encoded_size(read_lengths: Iterable[int]) -> int:
    """
    Exact size of the encoded buffer for reads of the given lengths.

    Four bytes for the read count, then for each read one byte per base
    call, one per quality value and two terminators: 2*(length+1).
    """
    return READ_COUNT_STRUCT.size + sum(2 * (length + 1) for length in read_lengths)


def encode_reads(
    reads: Iterable[T],
    projection: Optional[Callable[[T], BasesAndQuals]] = None,
) -> bytes:
    """
    Encode reads into the engine's input buffer.

    The projection is applied exactly once per input element, so `reads`
    may be a one-shot iterator.

    Args:
        reads: Reads, or objects the projection turns into reads
        projection: Maps each element to an object with `bases` and `quals`
                    (default: elements already are reads)

    Returns:
        Encoded buffer; an empty input yields 4 bytes holding a zero count

    Raises:
        InputError: If a read's bases and quals differ in length, or either
                    contains a NUL byte
    """
    projected = _project(reads, projection or _identity)

    capacity = encoded_size(len(bases) for bases, _ in projected)
    buffer = bytearray(capacity)
    READ_COUNT_STRUCT.pack_into(buffer, 0, len(projected))

    pos = READ_COUNT_STRUCT.size
    for bases, quals in projected:
        end = pos + len(bases)
        buffer[pos:end] = bases
        pos = end + 1  # terminator already zero
        end = pos + len(quals)
        buffer[pos:end] = quals
        pos = end + 1

    logger.debug(f"Encoded {len(projected)} reads into {capacity} bytes")
    return bytes(buffer)


class ReadEncoder:
    """
    Encoder bound to a projection from a caller's read type.

    Example:
        >>> encoder = ReadEncoder(lambda rec: Read.from_strings(rec.seq, rec.qual))
        >>> data = encoder.encode(records)
    """

    def __init__(self, projection: Optional[Callable[[T], BasesAndQuals]] = None):
        self.projection = projection

    def encode(self, reads: Iterable[T]) -> bytes:
        return encode_reads(reads, self.projection)

# ContigWire v0.1.0
# Any usage is subject to this software's license.
