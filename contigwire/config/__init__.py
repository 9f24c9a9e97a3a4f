"""
ContigWire v0.1.0

Configuration management for ContigWire.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .schema import (
    DEFAULT_CONFIG,
    load_config,
    save_config_template,
    validate_config,
    engine_options,
)

__all__ = [
    "DEFAULT_CONFIG",
    "load_config",
    "save_config_template",
    "validate_config",
    "engine_options",
]
