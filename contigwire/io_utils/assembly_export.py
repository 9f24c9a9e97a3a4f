#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWire v0.1.0

Assembly Export — GFA graph export, contig FASTA, statistics JSON and
GFA validation.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from ..assembly_core.data_structures import Assembly, Connection

logger = logging.getLogger(__name__)

GFA_HEADER = "H\tVN:Z:1.0"


# ============================================================================
#                       GFA EXPORT FUNCTIONS
# ============================================================================

def generate_contig_name(contig_id: int) -> str:
    """
    Generate the external contig name from its position in the assembly.

    Example:
        >>> generate_contig_name(3)
        'tig3'
    """
    return f"tig{contig_id}"


def parse_contig_name(name: str) -> int:
    """
    Parse a contig name back to its position in the assembly.

    Raises:
        ValueError: If name format is invalid
    """
    if not name.startswith('tig'):
        raise ValueError(f"Invalid contig name format: {name} (expected 'tigN')")
    try:
        return int(name[3:])
    except ValueError as e:
        raise ValueError(f"Failed to parse contig name: {name}") from e


def overlap_cigar(overlap_len: int) -> str:
    """CIGAR for a link: matched overlap as 'nM', a gap as 'nH'."""
    return f"{-overlap_len}H" if overlap_len < 0 else f"{overlap_len}M"


@dataclass
class GFASegment:
    """Represents a GFA S-line (segment)."""
    name: str
    sequence: str
    length: int
    read_count: int

    def to_gfa_line(self) -> str:
        """
        Convert to GFA S-line format.

        Format: S <name> <sequence> LN:i:<length> RC:i:<read count>
        """
        return f"S\t{self.name}\t{self.sequence}\tLN:i:{self.length}\tRC:i:{self.read_count}"


@dataclass
class GFALink:
    """Represents a GFA L-line (link/edge)."""
    from_name: str
    from_orient: str  # '+' or '-'
    to_name: str
    to_orient: str    # '+' or '-'
    overlap: str      # CIGAR, e.g. '5M'

    @classmethod
    def from_connection(cls, contig_id: int, connection: Connection) -> GFALink:
        return cls(
            from_name=generate_contig_name(contig_id),
            from_orient='-' if connection.is_rc else '+',
            to_name=generate_contig_name(connection.target_id),
            to_orient='-' if connection.is_target_rc else '+',
            overlap=overlap_cigar(connection.overlap_len),
        )

    def to_gfa_line(self) -> str:
        """
        Convert to GFA L-line format.

        Format: L <from> <from_orient> <to> <to_orient> <overlap>
        """
        return f"L\t{self.from_name}\t{self.from_orient}\t{self.to_name}\t{self.to_orient}\t{self.overlap}"


def write_gfa(assembly: Assembly, sink: TextIO) -> int:
    """
    Stream an assembly to a text sink as GFA v1.

    Each contig's S-line is followed by the L-lines of its connections.
    Both endpoints of an overlap carry a connection record; a link is
    written only from the endpoint with the lower (or equal) id, so each
    overlap, self-loops included, appears once.

    Args:
        assembly: Assembly to render
        sink: Writable text stream

    Returns:
        Number of L-lines written
    """
    n_links = 0
    sink.write(GFA_HEADER + "\n")
    for contig_id, contig in enumerate(assembly.contigs):
        segment = GFASegment(
            name=generate_contig_name(contig_id),
            sequence=contig.sequence_text,
            length=contig.length,
            read_count=contig.supporting_read_count,
        )
        sink.write(segment.to_gfa_line() + "\n")
        for connection in contig.connections:
            if contig_id <= connection.target_id:
                sink.write(GFALink.from_connection(contig_id, connection).to_gfa_line() + "\n")
                n_links += 1
    return n_links


def export_assembly_to_gfa(assembly: Assembly, output_path: str | Path) -> Path:
    """
    Export an assembly to a GFA file.

    Args:
        assembly: Assembly to export
        output_path: Path to output GFA file

    Returns:
        Path of the written file
    """
    output_path = Path(output_path)
    logger.info(f"Exporting assembly to GFA: {output_path}")

    with open(output_path, 'w', encoding='latin-1', newline='\n') as f:
        n_links = write_gfa(assembly, f)

    logger.info(f"GFA export complete: {output_path}")
    logger.info(f"  Segments: {assembly.contig_count()}")
    logger.info(f"  Links: {n_links}")
    return output_path


def validate_gfa_file(gfa_path: str | Path) -> dict[str, Any]:
    """
    Validate a GFA file and return basic statistics.

    Args:
        gfa_path: Path to GFA file

    Returns:
        Dict with keys: 'segments', 'links', 'version'
    """
    gfa_path = Path(gfa_path)
    stats: dict[str, Any] = {
        'segments': 0,
        'links': 0,
        'version': None
    }

    with open(gfa_path, 'r', encoding='latin-1') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue

            if line.startswith('H'):
                if 'VN:Z:' in line:
                    stats['version'] = line.split('VN:Z:')[1].split()[0]
            elif line.startswith('S'):
                stats['segments'] += 1
            elif line.startswith('L'):
                stats['links'] += 1

    return stats


# ============================================================================
#                    ASSEMBLY SEQUENCE EXPORT
# ============================================================================

def write_contigs_fasta(
    assembly: Assembly,
    output_path: str | Path,
    line_width: int = 80
) -> Path:
    """
    Export assembled contigs to FASTA format.

    Records are named after the GFA segments (tig0, tig1, ...) so the two
    outputs cross-reference.

    Args:
        assembly: Assembly to export
        output_path: Path to output FASTA file
        line_width: Number of bases per line (0 = no wrapping)
    """
    output_path = Path(output_path)
    logger.info(f"Writing {assembly.contig_count()} contigs to {output_path}")

    with open(output_path, 'w', encoding='latin-1', newline='\n') as f:
        for contig_id, contig in enumerate(assembly.contigs):
            sequence = contig.sequence_text
            f.write(
                f">{generate_contig_name(contig_id)} length={contig.length} "
                f"reads={contig.supporting_read_count}\n"
            )
            if line_width > 0:
                for i in range(0, len(sequence), line_width):
                    f.write(sequence[i:i+line_width] + "\n")
            else:
                f.write(sequence + "\n")

    logger.info(f"Exported {assembly.contig_count()} contigs ({assembly.total_length():,} bp)")
    return output_path


def compute_assembly_stats(assembly: Assembly) -> dict[str, Any]:
    """
    Summary metrics for an assembly.

    Returns:
        Dictionary with contig count, total/min/max length, the size
        statistic, connection records and GFA link count
    """
    lengths = [contig.length for contig in assembly]
    n_links = sum(
        1
        for contig_id, contig in enumerate(assembly.contigs)
        for conn in contig.connections
        if contig_id <= conn.target_id
    )
    branch_points = sum(
        1
        for contig in assembly
        for is_rc in (True, False)
        if len(contig.side_connections(is_rc)) > 1
    )
    return {
        'num_contigs': assembly.contig_count(),
        'total_length': sum(lengths),
        'max_contig_length': max(lengths) if lengths else 0,
        'min_contig_length': min(lengths) if lengths else 0,
        'n50': assembly.compute_size_statistic(),
        'num_connections': assembly.connection_count(),
        'num_links': n_links,
        'num_branch_points': branch_points,
        'supporting_reads': sum(contig.supporting_read_count for contig in assembly),
    }


def export_assembly_stats(assembly: Assembly, output_path: str | Path) -> dict[str, Any]:
    """
    Calculate and export assembly statistics to JSON.

    Example:
        >>> stats = export_assembly_stats(assembly, 'assembly_stats.json')
        >>> print(f"N50: {stats['n50']:,} bp")
    """
    output_path = Path(output_path)
    logger.info("Calculating assembly statistics...")

    stats = compute_assembly_stats(assembly)
    with open(output_path, 'w') as f:
        json.dump(stats, f, indent=2)

    logger.info(f"Assembly statistics exported to {output_path}")
    logger.info(f"  Total length: {stats['total_length']:,} bp")
    logger.info(f"  N50: {stats['n50']:,} bp")
    return stats

# ContigWire v0.1.0
# Any usage is subject to this software's license.
