"""
ContigWire v0.1.0

Binary protocol between ContigWire and the assembly engine.

1. read_encoder.py - Reads -> engine input buffer
2. assembly_decoder.py - Engine output buffer -> Assembly
3. options.py - Fixed 80-byte engine options block

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .read_encoder import (
    BasesAndQuals,
    ReadEncoder,
    encode_reads,
    encoded_size,
)
from .assembly_decoder import (
    AssemblyDecoder,
    decode_assembly,
    split_flagged,
    join_flagged,
)
from .options import (
    AssemblerOptions,
    OPTIONS_SIZE,
)

__all__ = [
    # Reads
    "BasesAndQuals",
    "ReadEncoder",
    "encode_reads",
    "encoded_size",
    # Assembly
    "AssemblyDecoder",
    "decode_assembly",
    "split_flagged",
    "join_flagged",
    # Options
    "AssemblerOptions",
    "OPTIONS_SIZE",
]
