#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWire v0.1.0

Assembler — one encode / engine / decode round trip per call.

The assembly engine itself is an opaque collaborator. Anything satisfying
the AssemblyEngine protocol can be plugged in: a binding to the native
library, a subprocess wrapper, or a canned-response stub in tests.

An Assembler is not thread-safe, but it is light-weight: use a separate
instance in each thread. Instances share no mutable state.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Protocol, TypeVar, runtime_checkable

from ..exceptions import AssemblyFailure
from ..wire.assembly_decoder import decode_assembly
from ..wire.options import AssemblerOptions
from ..wire.read_encoder import BasesAndQuals, encode_reads
from .data_structures import Assembly

logger = logging.getLogger(__name__)

T = TypeVar('T')


@runtime_checkable
class AssemblyEngine(Protocol):
    """
    Protocol for the external assembly engine.

    assemble() receives the 80-byte options block and the encoded reads
    and returns the encoded assembly, or None when it could not assemble.
    release() is called exactly once for every buffer assemble() returned,
    whether or not decoding succeeded.

    An engine may also provide version() returning its version string;
    Assembler.engine_version() uses it when present.
    """

    def assemble(self, options: bytes, read_data: bytes) -> Optional[bytes]:
        ...

    def release(self, assembly_data: bytes) -> None:
        ...


class Assembler:
    """
    Managed front end for an assembly engine.

    Holds one options block. Usable as a context manager; once closed,
    every operation raises RuntimeError.

    Example:
        >>> with Assembler(engine) as assembler:
        ...     assembler.options.min_asm_overlap = 41
        ...     assembly = assembler.create_assembly(reads)
    """

    def __init__(self, engine: AssemblyEngine, options: Optional[AssemblerOptions] = None):
        self.engine = engine
        self._options: Optional[AssemblerOptions] = options or AssemblerOptions()

    @property
    def is_open(self) -> bool:
        return self._options is not None

    @property
    def options(self) -> AssemblerOptions:
        self._check_open()
        return self._options

    def engine_version(self) -> Optional[str]:
        """Version string reported by the engine, or None if it does not report one."""
        self._check_open()
        version = getattr(self.engine, 'version', None)
        if version is None:
            return None
        return str(version())

    def close(self) -> None:
        self._check_open()
        self._options = None

    def __enter__(self) -> Assembler:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.is_open:
            self.close()

    def create_assembly(
        self,
        reads: Iterable[T],
        projection: Optional[Callable[[T], BasesAndQuals]] = None,
    ) -> Assembly:
        """
        Assemble reads with the engine.

        Args:
            reads: Reads, or objects the projection turns into reads
            projection: Maps each element to an object with `bases` and `quals`

        Returns:
            Decoded Assembly

        Raises:
            InputError: If a read is malformed
            AssemblyFailure: If the engine produced no assembly
            DecodeError: If the engine output violates the assembly layout
        """
        self._check_open()
        read_data = encode_reads(reads, projection)
        options_block = self._options.to_bytes()

        logger.info(f"Running assembly engine on {len(read_data):,} bytes of read data")
        assembly_data = self.engine.assemble(options_block, read_data)
        if assembly_data is None:
            raise AssemblyFailure("Unable to create assembly.")

        try:
            assembly = decode_assembly(assembly_data)
        finally:
            self.engine.release(assembly_data)

        logger.info(
            f"Assembly complete: {assembly.contig_count()} contigs, "
            f"{assembly.total_length():,} bp"
        )
        return assembly

    def _check_open(self) -> None:
        if self._options is None:
            raise RuntimeError("The assembler has been closed.")

    def __repr__(self) -> str:
        return f"Assembler(engine={type(self.engine).__name__}, open={self.is_open})"

# ContigWire v0.1.0
# Any usage is subject to this software's license.
