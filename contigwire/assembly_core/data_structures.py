#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWire v0.1.0

Assembly graph data structures — reads, contigs, connections and the
assembly that owns them.

Contigs live in an arena (the Assembly's contig tuple) and are addressed by
their position in it. Connections hold the target's index rather than a
reference to the target, so a contig graph with self-loops and mutual
overlaps never forms an ownership cycle.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple
import logging

import numpy as np

from ..exceptions import AssemblyConsistencyError

logger = logging.getLogger(__name__)

# Quality bytes are Phred scores shifted into printable ASCII
PHRED_OFFSET = 33


# ============================================================================
#                              READS
# ============================================================================

@dataclass(frozen=True)
class Read:
    """
    One read as the engine sees it: base calls and per-base quality bytes.

    Attributes:
        bases: One byte per base call (e.g. b'ACGT')
        quals: One quality byte per base call, same length as bases
    """
    bases: bytes
    quals: bytes

    @classmethod
    def from_strings(cls, sequence: str, quality: str) -> 'Read':
        """Build a read from a sequence string and a Phred+33 quality string."""
        return cls(sequence.encode('ascii'), quality.encode('ascii'))

    @classmethod
    def with_constant_quality(cls, sequence: str, quality: int = 30) -> 'Read':
        """Build a read whose every base carries the same Phred score (stored as Phred+33)."""
        bases = sequence.encode('ascii')
        return cls(bases, bytes([quality + PHRED_OFFSET]) * len(bases))

    def __len__(self) -> int:
        return len(self.bases)


# ============================================================================
#                        CONTIGS AND CONNECTIONS
# ============================================================================

@dataclass(frozen=True)
class Connection:
    """
    One contig's view of an overlap with another contig.

    The same physical overlap appears once in each endpoint's connection
    list; each contig owns its own view of the edge.

    Attributes:
        target_id: Index of the target contig in the owning Assembly
                   (may be the owner itself for a self-loop)
        overlap_len: Bases shared with the target
        is_rc: Target is upstream of this contig's 5' end (a predecessor)
        is_target_rc: Connection is to the reverse complement of the target
    """
    target_id: int
    overlap_len: int
    is_rc: bool = False
    is_target_rc: bool = False

    def rc_connection(self, owner_id: int) -> 'Connection':
        """
        Express this connection from the target's point of view.

        Args:
            owner_id: Index of the contig whose connection list holds this one

        Returns:
            Connection pointing back at the owner with the two orientation
            flags swapped
        """
        return Connection(
            target_id=owner_id,
            overlap_len=self.overlap_len,
            is_rc=self.is_target_rc,
            is_target_rc=self.is_rc,
        )


@dataclass(eq=False)
class Contig:
    """
    An assembled sequence with per-base coverage and its graph connections.

    Connections are assigned exactly once, by set_connections(), after every
    contig of the assembly exists. Before that the contig has none.

    Attributes:
        sequence: Base calls of the contig
        per_base_coverage: One coverage byte per base, index-aligned with sequence
        supporting_read_count: Number of reads the engine used for this contig
        connections: Overlaps with other contigs, in engine order
    """
    sequence: bytes
    per_base_coverage: bytes
    supporting_read_count: int
    connections: Tuple[Connection, ...] = field(default=(), init=False)
    _wired: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        """Validate sequence/coverage alignment."""
        if len(self.sequence) != len(self.per_base_coverage):
            raise ValueError(
                f"Contig sequence length {len(self.sequence)} != "
                f"coverage length {len(self.per_base_coverage)}"
            )

    @property
    def length(self) -> int:
        """Length of the contig in bases."""
        return len(self.sequence)

    @property
    def sequence_text(self) -> str:
        """Sequence as text, one character per byte."""
        return self.sequence.decode('latin-1')

    @property
    def mean_coverage(self) -> float:
        """Mean of the per-base coverage bytes (0.0 for an empty contig)."""
        if not self.per_base_coverage:
            return 0.0
        return float(np.frombuffer(self.per_base_coverage, dtype=np.uint8).mean())

    def set_connections(self, connections: Iterable[Connection]) -> None:
        """
        Attach this contig's connections. May be called only once.

        Raises:
            RuntimeError: If connections were already assigned
        """
        if self._wired:
            raise RuntimeError("Contig connections have already been assigned")
        self.connections = tuple(connections)
        self._wired = True

    def side_connections(self, is_rc: bool) -> List[Connection]:
        """All connections attached to one side of the contig."""
        return [conn for conn in self.connections if conn.is_rc == is_rc]

    def singleton_connection(self, is_rc: bool) -> Optional[Connection]:
        """
        Return the only connection on the requested side, if there is one.

        Returns None both when no connection matches and when several do;
        several matches mark a branch point rather than a linear stretch.
        Use side_connections() to tell the two cases apart.
        """
        singleton = None
        for conn in self.connections:
            if conn.is_rc == is_rc:
                if singleton is not None:
                    return None
                singleton = conn
        return singleton

    def sole_predecessor(self) -> Optional[Connection]:
        return self.singleton_connection(True)

    def sole_successor(self) -> Optional[Connection]:
        return self.singleton_connection(False)


# ============================================================================
#                              ASSEMBLY
# ============================================================================

class Assembly:
    """
    An ordered, immutable collection of contigs.

    A contig's identity is its position in the collection; connection
    target ids index into the same positions.
    """

    def __init__(self, contigs: Sequence[Contig]):
        self._contigs: Tuple[Contig, ...] = tuple(contigs)

    @property
    def contigs(self) -> Tuple[Contig, ...]:
        return self._contigs

    def contig_count(self) -> int:
        return len(self._contigs)

    def contig(self, index: int) -> Contig:
        """
        Get a contig by position.

        Raises:
            IndexError: If index is outside [0, contig_count())
        """
        if not 0 <= index < len(self._contigs):
            raise IndexError(
                f"Contig index {index} out of range for assembly of "
                f"{len(self._contigs)} contigs"
            )
        return self._contigs[index]

    def index_of(self, contig: Contig) -> int:
        """Position of a contig in this assembly (identity comparison)."""
        for idx, candidate in enumerate(self._contigs):
            if candidate is contig:
                return idx
        raise ValueError("Contig does not belong to this assembly")

    def target_of(self, connection: Connection) -> Contig:
        """Resolve a connection's target contig."""
        return self.contig(connection.target_id)

    def total_length(self) -> int:
        return sum(contig.length for contig in self._contigs)

    def connection_count(self) -> int:
        """Number of directed connection records over all contigs."""
        return sum(len(contig.connections) for contig in self._contigs)

    def compute_size_statistic(self) -> int:
        """
        Compute the N50-like length summary of the assembly.

        Lengths are sorted ascending and scanned from the longest down,
        accumulating twice each length; the first length whose running
        total reaches the summed length of all contigs is returned.

        Returns:
            0 for an empty assembly, the contig length for a single contig,
            otherwise the statistic described above

        Raises:
            AssemblyConsistencyError: If no length satisfies the scan
        """
        n_contigs = len(self._contigs)
        if n_contigs < 1:
            return 0
        if n_contigs == 1:
            return self._contigs[0].length

        lengths = np.sort(np.array([c.length for c in self._contigs], dtype=np.int64))
        total_size = int(lengths.sum())
        running_total = 0
        for length in lengths[::-1]:
            running_total += 2 * int(length)
            if running_total >= total_size:
                return int(length)

        raise AssemblyConsistencyError(
            "impossible situation -- sum of lengths exceeds twice the sum of each length"
        )

    def __len__(self) -> int:
        return len(self._contigs)

    def __iter__(self) -> Iterator[Contig]:
        return iter(self._contigs)

    def __repr__(self) -> str:
        return f"Assembly(contigs={len(self._contigs)}, total_length={self.total_length()})"

# ContigWire v0.1.0
# Any usage is subject to this software's license.
