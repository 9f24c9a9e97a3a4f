"""
Assembly Core module for ContigWire.

This module provides the in-memory assembly graph and the managed
front end to the external assembly engine:
- Reads, contigs, connections and the assembly that owns them
- Size statistic and branch-point queries over the contig graph
- Encode / engine / decode round trip with deterministic buffer release
"""

from .data_structures import (
    Read,
    Contig,
    Connection,
    Assembly,
)

from .assembler import (
    Assembler,
    AssemblyEngine,
)

__all__ = [
    # Core classes
    "Read",
    "Contig",
    "Connection",
    "Assembly",
    # Engine boundary
    "Assembler",
    "AssemblyEngine",
]
