"""
ContigWire v0.1.0

I/O Module for ContigWire.

1. read_input.py - FASTQ/FASTA reads -> Read objects
2. assembly_export.py - Assembly export (GFA, FASTA, statistics JSON)
"""

from .read_input import (
    read_sequences,
    load_reads,
    record_to_read,
    detect_format,
)

from .assembly_export import (
    # Graph export
    write_gfa,
    export_assembly_to_gfa,
    validate_gfa_file,
    # Assembly export
    write_contigs_fasta,
    compute_assembly_stats,
    export_assembly_stats,
    # Utilities
    generate_contig_name,
    parse_contig_name,
    overlap_cigar,
)

__all__ = [
    # Read input
    "read_sequences",
    "load_reads",
    "record_to_read",
    "detect_format",

    # Assembly export
    "write_gfa",
    "export_assembly_to_gfa",
    "validate_gfa_file",
    "write_contigs_fasta",
    "compute_assembly_stats",
    "export_assembly_stats",
    "generate_contig_name",
    "parse_contig_name",
    "overlap_cigar",
]
