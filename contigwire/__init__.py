#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWire v0.1.0

Package initialization and version metadata.

Binary read/assembly protocol for an external short-read assembly engine,
the contig graph it produces, and GFA export of that graph.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .version import __version__
from .exceptions import (
    ContigWireError,
    InputError,
    DecodeError,
    AssemblyFailure,
    AssemblyConsistencyError,
    ConfigValidationError,
)
from .assembly_core import (
    Read,
    Contig,
    Connection,
    Assembly,
    Assembler,
    AssemblyEngine,
)
from .wire import encode_reads, decode_assembly, AssemblerOptions
from .io_utils import write_gfa, export_assembly_to_gfa

__all__ = [
    "__version__",
    # Errors
    "ContigWireError",
    "InputError",
    "DecodeError",
    "AssemblyFailure",
    "AssemblyConsistencyError",
    "ConfigValidationError",
    # Graph model
    "Read",
    "Contig",
    "Connection",
    "Assembly",
    # Engine boundary
    "Assembler",
    "AssemblyEngine",
    "AssemblerOptions",
    # Wire protocol
    "encode_reads",
    "decode_assembly",
    # Export
    "write_gfa",
    "export_assembly_to_gfa",
]

# ContigWire v0.1.0
# Any usage is subject to this software's license.
