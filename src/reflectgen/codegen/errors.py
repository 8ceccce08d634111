# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generation errors and the outcome value returned to callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from reflectgen.codegen.sink import GeneratedFile

# ###############
# Public Interface
# ###############


class GenerationErrorKind(Enum):
    """Categories of input-data errors that abort a generation pass."""

    CYCLIC_DEPENDENCY = "cyclic-dependency"
    INVALID_PARENT_HIERARCHY = "invalid-parent-hierarchy"
    UNRESOLVED_RESOURCE_PARENT = "unresolved-resource-parent"


class GenerationStage(Enum):
    """Progress of a solution generation pass."""

    IDLE = "idle"
    PER_PROJECT = "per-project"
    RUNTIME_AGGREGATE = "runtime-aggregate"
    TOOLS_AGGREGATE = "tools-aggregate"
    DONE = "done"
    FAILED = "failed"


class GenerationError(Exception):
    """Raised by composers when the schema cannot be turned into valid code.

    The public entry points convert it into a failed :class:`GenerationResult`.
    """

    def __init__(self, kind: GenerationErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class SchemaInvariantError(GenerationError):
    """The schema is internally inconsistent.

    Unlike other generation errors this is never folded into a result: it
    indicates a broken extractor, not a recoverable input problem.
    """


@dataclass(frozen=True)
class GenerationDiagnostic:
    """The error that stopped a generation pass.

    Attributes:
        kind: Category of the failure.
        message: Human-readable description naming the offending project or type.
    """

    kind: GenerationErrorKind
    message: str


@dataclass
class GenerationResult:
    """Outcome of a generation call.

    Attributes:
        files: Generated files, empty when the pass failed.
        stage: Last stage reached; ``FAILED`` when an error occurred.
        error: The failure, if any.
        warning: The most recent warning; earlier warnings are overwritten.
    """

    files: list[GeneratedFile] = field(default_factory=list)
    stage: GenerationStage = GenerationStage.IDLE
    error: GenerationDiagnostic | None = None
    warning: str | None = None

    @property
    def succeeded(self) -> bool:
        """Return True if the pass completed without an error."""
        return self.error is None

    def fail(self, exc: GenerationError) -> GenerationResult:
        """Record *exc* as the failure and drop any partial output."""
        self.files = []
        self.stage = GenerationStage.FAILED
        self.error = GenerationDiagnostic(kind=exc.kind, message=exc.message)
        return self
