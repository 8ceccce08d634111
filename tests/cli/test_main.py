# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the reflectgen CLI entry point."""

import sys
from pathlib import Path

import pytest

from reflectgen.cli.main import main
from reflectgen.codegen.constants import DEFAULT_RUNTIME_REGISTRATION_FILE, DEFAULT_TOOLS_REGISTRATION_FILE
from reflectgen.database.schema_file import save_schema
from reflectgen.model.entities import Header, Project, ResourceType, Schema, StructType

# ###############
# Test Helpers
# ###############


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["reflectgen", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def _schema(types: list | None = None, resource_types: list[ResourceType] | None = None) -> Schema:
    project = Project(
        id="base",
        name="Base",
        module_class_name="EE::BaseModule",
        type_info_directory="Code/Base/_AutoGenerated",
        module_header="module",
        headers=[
            Header(id="module", path="Code/Base/Module.h", type_info_path="Code/Base/_AutoGenerated/Module.h", project="base"),
            Header(id="types", path="Code/Base/Types.h", type_info_path="Code/Base/_AutoGenerated/Types.h", project="base"),
        ],
    )
    if types is None:
        types = [StructType(name="Thing", namespace="EE::", header="types", parent="EE::IReflectedType")]
    return Schema(projects=[project], types=types, resource_types=resource_types or [])


def _workspace(tmp_path: Path, schema: Schema | None = None, config: str = "schema: schema.json\n") -> Path:
    save_schema(schema or _schema(), tmp_path / "schema.json")
    (tmp_path / ".reflectgen.yaml").write_text(config, encoding="utf-8")
    return tmp_path


# ###############
# Tests
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- init tests --------


def test_init_creates_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "init", str(tmp_path)) == 0
    content = (tmp_path / ".reflectgen.yaml").read_text(encoding="utf-8")
    assert "schema:" in content
    assert "jobs: 1" in content


def test_init_default_directory_uses_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "init") == 0
    assert (tmp_path / ".reflectgen.yaml").exists()


def test_init_fails_if_config_exists(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".reflectgen.yaml").write_text("schema: s.json\n", encoding="utf-8")
    assert _run(monkeypatch, "init", str(tmp_path)) == 1
    assert "already exists" in capsys.readouterr().err


def test_init_fails_for_missing_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "init", str(tmp_path / "absent")) == 1


# -------- check tests --------


def test_check_valid_schema(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "check", str(tmp_path)) == 0
    assert "No issues found." in capsys.readouterr().out


def test_check_reports_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    broken = StructType(name="Thing", namespace="EE::", header="types", parent="EE::Missing")
    _workspace(tmp_path, _schema(types=[broken]))
    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    err = capsys.readouterr().err
    assert "Error:" in err
    assert "derives from unknown type 'EE::Missing'" in err


def test_check_without_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    assert "reflectgen init" in capsys.readouterr().err


def test_check_with_invalid_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".reflectgen.yaml").write_text("jobs: 2\n", encoding="utf-8")
    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    assert "missing required field 'schema'" in capsys.readouterr().err


def test_check_with_missing_schema(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".reflectgen.yaml").write_text("schema: absent.json\n", encoding="utf-8")
    assert _run(monkeypatch, "check", str(tmp_path)) == 1
    assert "Cannot read schema file" in capsys.readouterr().err


# -------- generate tests --------


def test_generate_writes_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "generate", str(tmp_path)) == 0
    assert (tmp_path / "Code/Base/_AutoGenerated/Types.h").exists()
    assert (tmp_path / "Code/Base/_AutoGenerated/_module.h").exists()
    assert (tmp_path / "Code/Base/_AutoGenerated/_module.cpp").exists()
    assert (tmp_path / DEFAULT_RUNTIME_REGISTRATION_FILE).exists()
    assert (tmp_path / DEFAULT_TOOLS_REGISTRATION_FILE).exists()
    assert "Generated 5 file(s), 5 updated." in capsys.readouterr().out


def test_generate_twice_updates_nothing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "generate", str(tmp_path)) == 0
    capsys.readouterr()
    assert _run(monkeypatch, "generate", str(tmp_path), "--jobs", "2") == 0
    assert "Generated 5 file(s), 0 updated." in capsys.readouterr().out


def test_generate_dry_run_writes_nothing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "generate", str(tmp_path), "--dry-run") == 0
    out = capsys.readouterr().out
    assert "Code/Base/_AutoGenerated/_module.cpp" in out
    assert "Would generate 5 file(s)." in out
    assert not (tmp_path / "Code").exists()


def test_generate_honours_solution_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _workspace(tmp_path, config="schema: schema.json\nsolution-directory: engine\nruntime-registration-file: R.h\n")
    assert _run(monkeypatch, "generate", str(tmp_path)) == 0
    assert (tmp_path / "engine" / "R.h").exists()
    assert (tmp_path / "engine" / "Code/Base/_AutoGenerated/_module.h").exists()


def test_generate_reports_generation_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    cyclic = [
        StructType(name="A", namespace="EE::", header="types", parent="EE::B"),
        StructType(name="B", namespace="EE::", header="types", parent="EE::A"),
    ]
    _workspace(tmp_path, _schema(types=cyclic))
    assert _run(monkeypatch, "generate", str(tmp_path)) == 1
    assert "Cyclic header dependency detected in project: Base" in capsys.readouterr().err
    assert not (tmp_path / "Code").exists()


def test_generate_reports_inconsistent_schema(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    resources = [ResourceType(type_id="EE::Thing", resource_type_id="thg", parents=["EE::Gone"])]
    _workspace(tmp_path, _schema(resource_types=resources))
    assert _run(monkeypatch, "generate", str(tmp_path)) == 1
    assert "inconsistent schema" in capsys.readouterr().err


def test_generate_rejects_non_positive_jobs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _workspace(tmp_path)
    assert _run(monkeypatch, "generate", str(tmp_path), "--jobs", "0") == 1


def test_generate_reports_each_warning_once(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    schema = _schema()
    loose = Project(id="loose", name="Loose", module_class_name="EE::LooseModule", type_info_directory="Code/Loose")
    _workspace(tmp_path, schema.model_copy(update={"projects": [*schema.projects, loose]}))
    assert _run(monkeypatch, "generate", str(tmp_path)) == 0
    err = capsys.readouterr().err
    assert err.count("Skipping project without a module header: Loose") == 1
