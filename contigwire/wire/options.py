#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWire v0.1.0

Engine options block — the fixed 80-byte record of 17 int32 and 3 float32 fields
handed to the engine alongside the encoded reads.

Field order and offsets are a contract with the engine; nothing here
interprets the graph-cleaning parameters beyond carrying them.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Union
import struct

from ..exceptions import DecodeError

# 17 int32 fields at offsets 0..64, then 3 float32 fields at 68, 72, 76
OPTIONS_STRUCT = struct.Struct('=17i3f')
OPTIONS_SIZE = 80


@dataclass
class AssemblerOptions:
    """
    Engine assembly options.

    Defaults are the engine's own initial values.
    """
    # Read-level settings
    n_threads: int = 1              # don't use multi-threading for small data sets
    ec_k: int = -1                  # k-mer length for error correction; -1/0 for auto estimate
    min_cnt: int = 4                # occurrence threshold in ec and tip threshold in cleaning
    max_cnt: int = 8                # lie in [min_cnt, max_cnt]
    min_asm_overlap: int = 33       # min overlap length during assembly
    min_merge_len: int = 0          # don't explicitly merge an overlap shorter than this

    # Graph cleaning
    cleaning_flag: int = 0xC0
    cleaning_min_overlap: int = 0
    cleaning_elen: int = 300
    cleaning_min_ensr: int = 4
    cleaning_min_insr: int = 3
    cleaning_max_bdist: int = 512
    cleaning_max_bdiff: int = 50
    cleaning_max_bvtx: int = 64
    cleaning_min_merge_len: int = 0
    cleaning_trim_len: int = 0
    cleaning_trim_depth: int = 6
    cleaning_dratio1: float = 0.7
    cleaning_max_bcov: float = 10.0
    cleaning_max_bfrac: float = 0.15

    def to_bytes(self) -> bytes:
        """Pack into the 80-byte host-order block the engine reads."""
        return OPTIONS_STRUCT.pack(*(getattr(self, f.name) for f in fields(self)))

    @classmethod
    def from_bytes(cls, block: Union[bytes, bytearray, memoryview]) -> 'AssemblerOptions':
        """
        Unpack an 80-byte options block.

        Raises:
            DecodeError: If the block is not exactly 80 bytes
        """
        if len(block) != OPTIONS_SIZE:
            raise DecodeError(
                f"Options block is {len(block)} bytes, expected {OPTIONS_SIZE}"
            )
        return cls(*OPTIONS_STRUCT.unpack(bytes(block)))

    @classmethod
    def from_config(cls, engine_config: Dict[str, Any]) -> 'AssemblerOptions':
        """
        Build options from the `engine` config section; unknown keys raise.

        Args:
            engine_config: Mapping of option name -> value
        """
        known = {f.name for f in fields(cls)}
        unknown = set(engine_config) - known
        if unknown:
            raise ValueError(f"Unknown engine options: {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in engine_config.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ContigWire v0.1.0
# Any usage is subject to this software's license.
