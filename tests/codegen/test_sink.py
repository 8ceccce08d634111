# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the generated file sink and disk writer."""

from pathlib import Path

from reflectgen.codegen.sink import GeneratedFile, GeneratedFileSink, write_generated_files


class TestGeneratedFileSink:
    def test_extend_keeps_order(self) -> None:
        sink = GeneratedFileSink()
        sink.extend([GeneratedFile("a.h", "A")])
        sink.extend([GeneratedFile("b.h", "B"), GeneratedFile("c.h", "C")])
        assert [f.path for f in sink.files] == ["a.h", "b.h", "c.h"]
        assert len(sink) == 3

    def test_files_returns_a_copy(self) -> None:
        sink = GeneratedFileSink()
        sink.extend([GeneratedFile("a.h", "A")])
        sink.files.clear()
        assert len(sink) == 1


class TestWriteGeneratedFiles:
    def test_writes_relative_paths_below_root(self, tmp_path: Path) -> None:
        written = write_generated_files([GeneratedFile("Code/x/_module.h", "content")], tmp_path)
        target = tmp_path / "Code" / "x" / "_module.h"
        assert written == [target]
        assert target.read_text(encoding="utf-8") == "content"

    def test_unchanged_files_are_skipped(self, tmp_path: Path) -> None:
        files = [GeneratedFile("a.h", "same")]
        write_generated_files(files, tmp_path)
        assert write_generated_files(files, tmp_path) == []

    def test_changed_files_are_rewritten(self, tmp_path: Path) -> None:
        write_generated_files([GeneratedFile("a.h", "old")], tmp_path)
        written = write_generated_files([GeneratedFile("a.h", "new")], tmp_path)
        assert written == [tmp_path / "a.h"]
        assert (tmp_path / "a.h").read_text(encoding="utf-8") == "new"

    def test_absolute_paths_are_used_as_is(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere" / "b.h"
        write_generated_files([GeneratedFile(str(target), "x")], tmp_path / "root")
        assert target.read_text(encoding="utf-8") == "x"
