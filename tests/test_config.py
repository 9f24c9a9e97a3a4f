#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWire v0.1.0

Tests for configuration loading and validation.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
import yaml

from contigwire.config import (
    DEFAULT_CONFIG,
    engine_options,
    load_config,
    save_config_template,
    validate_config,
)
from contigwire.exceptions import ConfigValidationError


class TestLoadConfig:
    """Test loading and merging configuration files."""

    def test_defaults(self):
        config = load_config()

        assert config == DEFAULT_CONFIG
        assert validate_config(config) == []

    def test_defaults_not_shared(self):
        """Test callers cannot mutate the module defaults."""
        config = load_config()
        config['engine']['n_threads'] = 99

        assert DEFAULT_CONFIG['engine']['n_threads'] == 1

    def test_user_values_override(self, temp_output_dir):
        path = temp_output_dir / "config.yaml"
        path.write_text("engine:\n  n_threads: 4\ninput:\n  format: fasta\n")

        config = load_config(path)

        assert config['engine']['n_threads'] == 4
        assert config['engine']['min_cnt'] == 4
        assert config['input']['format'] == 'fasta'
        assert config['output']['gfa'] is True

    def test_empty_section_keeps_defaults(self, temp_output_dir):
        """Test a section key with nothing under it leaves the defaults in place."""
        path = temp_output_dir / "empty_section.yaml"
        path.write_text("engine:\noutput:\n  gfa: false\n")

        config = load_config(path)

        assert config['engine'] == DEFAULT_CONFIG['engine']
        assert config['output']['gfa'] is False
        assert validate_config(config) == []

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            load_config(temp_output_dir / "nope.yaml")

    def test_invalid_yaml(self, temp_output_dir):
        path = temp_output_dir / "bad.yaml"
        path.write_text("engine: [unclosed\n")

        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_non_mapping(self, temp_output_dir):
        path = temp_output_dir / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigValidationError):
            load_config(path)


class TestValidation:
    """Test configuration validation rules."""

    def _config(self, **engine):
        config = load_config()
        config['engine'].update(engine)
        return config

    def test_unknown_engine_option(self):
        errors = validate_config(self._config(kmer_size=31))

        assert any("kmer_size" in e for e in errors)

    def test_wrong_type(self):
        errors = validate_config(self._config(min_cnt="four"))

        assert any("min_cnt" in e for e in errors)

    def test_float_option_accepts_int(self):
        assert validate_config(self._config(cleaning_max_bcov=10)) == []

    def test_count_range(self):
        errors = validate_config(self._config(min_cnt=9, max_cnt=3))

        assert any("min_cnt" in e for e in errors)

    def test_threads(self):
        assert validate_config(self._config(n_threads=0))

    def test_int32_range(self):
        assert validate_config(self._config(cleaning_elen=2**31))

    def test_input_and_logging(self):
        config = load_config()
        config['input']['format'] = 'bam'
        config['input']['default_quality'] = 200
        config['logging']['level'] = 'LOUD'

        assert len(validate_config(config)) == 3

    def test_section_not_a_mapping(self, temp_output_dir):
        """Test a scalar or list section is reported instead of crashing."""
        path = temp_output_dir / "scalar_section.yaml"
        path.write_text("engine: 5\nlogging:\n  - DEBUG\n")

        errors = validate_config(load_config(path))

        assert any("'engine' must be a mapping" in e for e in errors)
        assert any("'logging' must be a mapping" in e for e in errors)

    def test_engine_options_section_not_a_mapping(self):
        config = load_config()
        config['engine'] = [1, 2]

        with pytest.raises(ConfigValidationError, match="must be a mapping"):
            engine_options(config)

    def test_engine_options(self):
        options = engine_options(self._config(n_threads=2))

        assert options.n_threads == 2

    def test_engine_options_invalid(self):
        with pytest.raises(ConfigValidationError):
            engine_options(self._config(n_threads=0))


class TestTemplates:
    """Test configuration templates."""

    @pytest.mark.parametrize("template", ["default", "low_coverage", "multithreaded"])
    def test_templates_valid(self, template, temp_output_dir):
        path = temp_output_dir / f"{template}.yaml"

        save_config_template(path, template=template)

        assert validate_config(load_config(path)) == []

    def test_low_coverage_values(self, temp_output_dir):
        path = temp_output_dir / "low.yaml"

        save_config_template(path, template="low_coverage")

        with open(path) as f:
            saved = yaml.safe_load(f)
        assert saved['engine']['min_cnt'] == 2
        assert saved['engine']['max_cnt'] == 4

    def test_unknown_template(self, temp_output_dir):
        with pytest.raises(ValueError):
            save_config_template(temp_output_dir / "x.yaml", template="exotic")

# ContigWire v0.1.0
# Any usage is subject to this software's license.
