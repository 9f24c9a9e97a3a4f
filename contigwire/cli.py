#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for ContigWire.

This module provides the main CLI entry point and all subcommands for
preparing engine input, packing engine options and turning engine output
into GFA, FASTA and statistics files.
"""

import logging
import sys
import click
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from .version import __version__
from .config.schema import (
    VALID_TEMPLATES,
    engine_options,
    load_config,
    save_config_template,
    validate_config,
)
from .exceptions import ContigWireError
from .io_utils.assembly_export import (
    compute_assembly_stats,
    export_assembly_stats,
    export_assembly_to_gfa,
    write_contigs_fasta,
)
from .io_utils.read_input import read_sequences
from .wire.assembly_decoder import decode_assembly
from .wire.read_encoder import encode_reads

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _setup_logging(ctx: click.Context, config: Dict[str, Any]) -> None:
    """Configure root logging from CLI flags and the `logging` config section."""
    if ctx.obj.get('VERBOSE'):
        level = logging.DEBUG
    elif ctx.obj.get('QUIET'):
        level = logging.ERROR
    else:
        level = getattr(logging, str(config['logging']['level']).upper())

    handlers = [logging.StreamHandler()]
    log_file = config['logging'].get('log_file')
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def _load_checked_config(config_file: Optional[str]) -> Dict[str, Any]:
    try:
        config = load_config(Path(config_file) if config_file else None)
    except ContigWireError as e:
        raise click.ClickException(str(e)) from e
    errors = validate_config(config)
    if errors:
        for error in errors:
            click.echo(f"  • {error}", err=True)
        raise click.ClickException("Configuration validation failed")
    return config


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    ContigWire: binary read/assembly protocol for a short-read assembly engine

    Encodes reads for the engine, packs its options block, and decodes its
    output into a contig graph exported as GFA, FASTA and statistics.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='contigwire_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t', type=click.Choice(VALID_TEMPLATES),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration file created: {output}")
    click.echo("\nThe configuration file includes:")
    click.echo("  • Engine options (packed into the 80-byte options block)")
    click.echo("  • Read input settings")
    click.echo("  • Output selection and logging")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ContigWireError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo("\nKey Settings:")
    click.echo(f"  Threads: {config['engine']['n_threads']}")
    click.echo(f"  Min assembly overlap: {config['engine']['min_asm_overlap']}")
    click.echo(f"  Input format: {config['input']['format']}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except ContigWireError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("✗ Configuration validation failed:", err=True)
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)

    click.echo("\nEngine:")
    for name, value in config['engine'].items():
        click.echo(f"  {name}: {value}")

    click.echo("\nInput:")
    click.echo(f"  Format: {config['input']['format']}")
    click.echo(f"  Default quality: {config['input']['default_quality']}")

    click.echo("\nOutput:")
    outputs = [name for name in ('gfa', 'fasta', 'stats') if config['output'][name]]
    click.echo(f"  Files: {', '.join(outputs) if outputs else 'none'}")


# ============================================================================
# Protocol Commands
# ============================================================================

@main.command()
@click.option('--input', '-i', 'input_file', required=True, type=click.Path(exists=True),
              help='Input reads (FASTQ or FASTA, optionally gzipped)')
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output file for the encoded read buffer')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.option('--format', '-f', 'file_format', type=click.Choice(['fastq', 'fasta']),
              default=None, help='Input format (default: from config or file name)')
@click.pass_context
def encode(ctx, input_file, output, config_file, file_format):
    """Encode reads into the engine's input buffer."""
    config = _load_checked_config(config_file)
    _setup_logging(ctx, config)

    input_config = config['input']
    if file_format is None and input_config['format'] != 'auto':
        file_format = input_config['format']

    try:
        reads = read_sequences(
            input_file,
            file_format=file_format,
            default_quality=input_config['default_quality'],
            min_length=input_config['min_length'],
        )
        read_data = encode_reads(reads)
    except (ContigWireError, ValueError) as e:
        click.echo(f"✗ Error encoding reads: {e}", err=True)
        sys.exit(1)

    Path(output).write_bytes(read_data)
    click.echo(f"✓ Encoded read buffer written: {output} ({len(read_data):,} bytes)")


@main.command()
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output file for the 80-byte options block')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.pass_context
def options(ctx, output, config_file):
    """Pack engine options into the binary options block."""
    config = _load_checked_config(config_file)
    _setup_logging(ctx, config)

    block = engine_options(config).to_bytes()
    Path(output).write_bytes(block)
    click.echo(f"✓ Options block written: {output} ({len(block)} bytes)")


@main.command()
@click.option('--input', '-i', 'input_file', required=True, type=click.Path(exists=True),
              help='Engine output buffer')
@click.option('--output', '-o', 'output_prefix', required=True, type=click.Path(),
              help='Output prefix (writes <prefix>.gfa, <prefix>.fasta, <prefix>_stats.json)')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.option('--gfa/--no-gfa', default=None, help='Write the assembly graph as GFA')
@click.option('--fasta/--no-fasta', default=None, help='Write contig sequences as FASTA')
@click.option('--stats/--no-stats', default=None, help='Write assembly statistics JSON')
@click.pass_context
def decode(ctx, input_file, output_prefix, config_file, gfa, fasta, stats):
    """Decode an engine output buffer and export the contig graph."""
    config = _load_checked_config(config_file)
    _setup_logging(ctx, config)
    output_config = config['output']

    try:
        assembly = decode_assembly(Path(input_file).read_bytes())
    except ContigWireError as e:
        click.echo(f"✗ Error decoding assembly: {e}", err=True)
        sys.exit(1)

    click.echo(
        f"Decoded {assembly.contig_count()} contigs "
        f"({assembly.total_length():,} bp, N50 {assembly.compute_size_statistic():,} bp)"
    )

    prefix = Path(output_prefix)
    prefix.parent.mkdir(parents=True, exist_ok=True)

    if gfa is None:
        gfa = output_config['gfa']
    if fasta is None:
        fasta = output_config['fasta']
    if stats is None:
        stats = output_config['stats']

    if gfa:
        path = export_assembly_to_gfa(assembly, Path(f"{prefix}.gfa"))
        click.echo(f"✓ GFA written: {path}")
    if fasta:
        path = write_contigs_fasta(
            assembly, Path(f"{prefix}.fasta"), line_width=output_config['fasta_line_width']
        )
        click.echo(f"✓ FASTA written: {path}")
    if stats:
        path = Path(f"{prefix}_stats.json")
        export_assembly_stats(assembly, path)
        click.echo(f"✓ Statistics written: {path}")


@main.command('stats')
@click.argument('input_file', type=click.Path(exists=True))
def stats_command(input_file):
    """Print summary statistics of an engine output buffer."""
    try:
        assembly = decode_assembly(Path(input_file).read_bytes())
    except ContigWireError as e:
        click.echo(f"✗ Error decoding assembly: {e}", err=True)
        sys.exit(1)

    for key, value in compute_assembly_stats(assembly).items():
        click.echo(f"{key}\t{value}")


if __name__ == '__main__':
    main()
