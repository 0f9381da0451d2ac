# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lint checks for compiled grammars (undocumented options, implicit commands, etc.)."""

from optspec.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate",
]
