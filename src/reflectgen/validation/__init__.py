# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for reflection schemas (parents, cycles, resource links, etc.)."""

from reflectgen.validation.checks import (
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
