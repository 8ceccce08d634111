# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Accumulation of generated files and persistence to disk."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from reflectgen.logging import get_logger

_log = get_logger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class GeneratedFile:
    """A generated output path and its full text."""

    path: str
    contents: str


class GeneratedFileSink:
    """Append-only collection of generated files.

    Safe to share between worker threads; entries keep the order in which
    they were added.
    """

    def __init__(self) -> None:
        self._files: list[GeneratedFile] = []
        self._lock = threading.Lock()

    def extend(self, files: Iterable[GeneratedFile]) -> None:
        files = list(files)
        with self._lock:
            self._files.extend(files)

    @property
    def files(self) -> list[GeneratedFile]:
        with self._lock:
            return list(self._files)

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)


def write_generated_files(files: Iterable[GeneratedFile], root: Path) -> list[Path]:
    """Write *files* below *root*, skipping files whose contents are unchanged.

    Relative paths are resolved against *root*; absolute paths are used as-is.

    Returns:
        The paths that were actually (re)written.
    """
    written: list[Path] = []
    for generated in files:
        target = Path(generated.path)
        if not target.is_absolute():
            target = root / target
        if target.exists() and target.read_text(encoding="utf-8") == generated.contents:
            _log.debug("Unchanged: %s", target)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generated.contents, encoding="utf-8")
        written.append(target)
    return written
