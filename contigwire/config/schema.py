"""
ContigWire v0.1.0

Configuration schema for ContigWire.

Defines all available configuration parameters with defaults and validation.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
from dataclasses import fields
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml

from ..exceptions import ConfigValidationError
from ..wire.options import AssemblerOptions


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Engine options (packed into the 80-byte options block)
    # ========================================================================
    'engine': AssemblerOptions().to_dict(),

    # ========================================================================
    # Read input
    # ========================================================================
    'input': {
        'format': 'auto',  # 'auto', 'fastq', 'fasta'
        'default_quality': 30,  # Phred score given to FASTA bases
        'min_length': 0,
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'gfa': True,
        'fasta': True,
        'stats': True,
        'fasta_line_width': 80,
    },

    # ========================================================================
    # Logging
    # ========================================================================
    'logging': {
        'level': 'INFO',
        'log_file': None,  # Console only by default
    },
}

VALID_TEMPLATES = ['default', 'low_coverage', 'multithreaded']
VALID_INPUT_FORMATS = ['auto', 'fastq', 'fasta']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
FLOAT_OPTIONS = {'cleaning_dratio1', 'cleaning_max_bcov', 'cleaning_max_bfrac'}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config_path does not exist
        ConfigValidationError: If the file is not valid YAML
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path) as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML in config file {config_path}: {e}"
            ) from e

        if user_config:
            if not isinstance(user_config, dict):
                raise ConfigValidationError(
                    f"Config file {config_path} must contain a mapping at top level"
                )
            # Deep merge user config into defaults
            config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        # An empty section (`engine:` with nothing under it) keeps the defaults
        if value is None and isinstance(result.get(key), dict):
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'low_coverage', 'multithreaded')
    """
    if template not in VALID_TEMPLATES:
        raise ValueError(f"Unknown template: {template}")

    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'low_coverage':
        config['engine']['min_cnt'] = 2
        config['engine']['max_cnt'] = 4

    elif template == 'multithreaded':
        config['engine']['n_threads'] = 4

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    sections = {}
    for name in DEFAULT_CONFIG:
        section = config.get(name, {})
        if isinstance(section, dict):
            sections[name] = section
        else:
            errors.append(f"Section '{name}' must be a mapping, got {section!r}")
            sections[name] = {}

    # Validate engine options
    engine = sections['engine']
    known = {f.name for f in fields(AssemblerOptions)}
    for name, value in engine.items():
        if name not in known:
            errors.append(f"Unknown engine option: {name}")
        elif name in FLOAT_OPTIONS:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"Engine option {name} must be a number, got {value!r}")
        elif isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"Engine option {name} must be an integer, got {value!r}")
        elif not -2**31 <= value < 2**31:
            errors.append(f"Engine option {name} does not fit in 32 bits: {value}")

    n_threads = engine.get('n_threads', 1)
    if isinstance(n_threads, int) and n_threads < 1:
        errors.append(f"Invalid n_threads: {n_threads} (must be >= 1)")

    min_cnt, max_cnt = engine.get('min_cnt'), engine.get('max_cnt')
    if isinstance(min_cnt, int) and isinstance(max_cnt, int) and min_cnt > max_cnt:
        errors.append(f"Invalid count range: min_cnt {min_cnt} > max_cnt {max_cnt}")

    # Validate input settings
    input_config = sections['input']
    if input_config.get('format', 'auto') not in VALID_INPUT_FORMATS:
        errors.append(f"Invalid input format: {input_config.get('format')}")
    quality = input_config.get('default_quality', 30)
    if not isinstance(quality, int) or not 0 <= quality <= 93:
        errors.append(f"Invalid default_quality: {quality} (must be 0-93)")

    # Validate output settings
    line_width = sections['output'].get('fasta_line_width', 80)
    if not isinstance(line_width, int) or line_width < 0:
        errors.append(f"Invalid fasta_line_width: {line_width}")

    # Validate logging
    level = sections['logging'].get('level', 'INFO')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    return errors


def engine_options(config: Dict[str, Any]) -> AssemblerOptions:
    """
    Build the engine options block from a validated configuration.

    Raises:
        ConfigValidationError: If the configuration has errors
    """
    errors = validate_config(config)
    if errors:
        raise ConfigValidationError("; ".join(errors))
    return AssemblerOptions.from_config(config.get('engine', {}))
