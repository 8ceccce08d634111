# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Indentation-aware text builder for emitting C++ source."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from reflectgen.codegen.constants import DEV_TOOLS_DEFINE, SEPARATOR

# ###############
# Public Interface
# ###############


class CodeWriter:
    """Accumulates lines of code at the current indentation level.

    Methods return ``self`` so short sequences can be chained::

        writer.line("int x = 0;").blank()
    """

    def __init__(self, indent_width: int = 4) -> None:
        self._parts: list[str] = []
        self._level = 0
        self._unit = " " * indent_width

    @property
    def level(self) -> int:
        return self._level

    def line(self, text: str = "") -> CodeWriter:
        """Write *text* on its own line; an empty string writes a blank line."""
        if text:
            self._parts.append(f"{self._unit * self._level}{text}\n")
        else:
            self._parts.append("\n")
        return self

    def lines(self, *texts: str) -> CodeWriter:
        for text in texts:
            self.line(text)
        return self

    def blank(self) -> CodeWriter:
        return self.line()

    def raw(self, text: str) -> CodeWriter:
        """Write *text* verbatim (no indentation, no newline added)."""
        self._parts.append(text)
        return self

    def separator(self) -> CodeWriter:
        return self.line(SEPARATOR)

    def label(self, text: str) -> CodeWriter:
        """Write *text* one level out from the current body (access specifiers)."""
        self.dedent()
        self.line(text)
        return self.indent()

    def banner(self, title: str) -> CodeWriter:
        """Write a separator-framed comment followed by a blank line."""
        return self.separator().line(f"// {title}").separator().blank()

    def indent(self) -> CodeWriter:
        self._level += 1
        return self

    def dedent(self) -> CodeWriter:
        if self._level == 0:
            raise ValueError("Cannot dedent below column zero")
        self._level -= 1
        return self

    @contextmanager
    def indented(self) -> Iterator[CodeWriter]:
        self.indent()
        try:
            yield self
        finally:
            self.dedent()

    @contextmanager
    def block(self, header: str | None = None, suffix: str = "") -> Iterator[CodeWriter]:
        """Emit ``header`` followed by a braced, indented body.

        Args:
            header: Line written before the opening brace, if any.
            suffix: Text appended after the closing brace (e.g. ``";"``).
        """
        if header is not None:
            self.line(header)
        self.line("{")
        self.indent()
        try:
            yield self
        finally:
            self.dedent()
            self.line("}" + suffix)

    @contextmanager
    def dev_only(self, enabled: bool = True) -> Iterator[CodeWriter]:
        """Wrap the body in a development-tools preprocessor guard when *enabled*."""
        if enabled:
            self.line(f"#if {DEV_TOOLS_DEFINE}")
        try:
            yield self
        finally:
            if enabled:
                self.line("#endif")

    def getvalue(self) -> str:
        return "".join(self._parts)


def cpp_string(text: str) -> str:
    """Return *text* as a double-quoted C++ string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
