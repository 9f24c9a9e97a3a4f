#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigWire v0.1.0

Error taxonomy shared by the encoder, the decoder, the assembly model and
the configuration layer.

Author: ContigWire Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Optional


class ContigWireError(Exception):
    """Base class for all ContigWire errors."""
    pass


class InputError(ContigWireError, ValueError):
    """Raised when reads handed to the encoder are malformed."""
    pass


class DecodeError(ContigWireError, ValueError):
    """
    Raised when an engine output buffer violates the assembly layout.
    
    Attributes:
        offset: Byte offset in the buffer where the violation was found
                (None when the fault is not tied to a position)
    """
    
    def __init__(self, message: str, offset: Optional[int] = None):
        if offset is not None:
            message = f"{message} (at byte offset {offset})"
        super().__init__(message)
        self.offset = offset


class AssemblyFailure(ContigWireError, RuntimeError):
    """Raised when the engine produced no assembly for the given reads."""
    pass


class AssemblyConsistencyError(ContigWireError, ArithmeticError):
    """Raised when an assembly's internal invariants no longer hold."""
    pass


class ConfigValidationError(ContigWireError):
    """Raised when configuration validation fails."""
    pass

# ContigWire v0.1.0
# Any usage is subject to this software's license.
