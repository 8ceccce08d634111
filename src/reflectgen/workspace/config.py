# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the ``.reflectgen.yaml`` generator configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from reflectgen.codegen.constants import DEFAULT_RUNTIME_REGISTRATION_FILE, DEFAULT_TOOLS_REGISTRATION_FILE

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".reflectgen.yaml"


class GeneratorConfigError(Exception):
    """Raised when a generator configuration file is invalid or cannot be loaded."""


@dataclass
class GeneratorConfig:
    """The parsed generator configuration.

    Paths are relative to the directory holding the configuration file.

    Attributes:
        schema: The schema document written by the extractor.
        solution_directory: Root that generated file paths are resolved against.
        runtime_registration_file: Output path of the runtime registration file,
            relative to the solution directory.
        tools_registration_file: Output path of the tools registration file,
            relative to the solution directory.
        jobs: Worker threads used for per-project generation.
    """

    schema: str
    solution_directory: str = "."
    runtime_registration_file: str = DEFAULT_RUNTIME_REGISTRATION_FILE
    tools_registration_file: str = DEFAULT_TOOLS_REGISTRATION_FILE
    jobs: int = 1


def load_generator_config(path: Path) -> GeneratorConfig:
    """Load and parse a generator configuration file.

    Args:
        path: Path to the ``.reflectgen.yaml`` file.

    Returns:
        A GeneratorConfig instance populated from the file.

    Raises:
        GeneratorConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise GeneratorConfigError(f"Generator config file not found: {path}") from None
    except OSError as exc:
        raise GeneratorConfigError(f"Cannot read generator config file: {exc}") from exc

    return parse_generator_config(text, source_label=str(path))


def parse_generator_config(text: str, source_label: str = "<string>") -> GeneratorConfig:
    """Parse generator config YAML text into a GeneratorConfig.

    Raises:
        GeneratorConfigError: If the YAML is invalid or a field is missing or malformed.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise GeneratorConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise GeneratorConfigError(f"{source_label}: generator config must be a YAML mapping")

    config = GeneratorConfig(schema=_require_string(data, "schema", source_label))
    if "solution-directory" in data:
        config.solution_directory = _require_string(data, "solution-directory", source_label)
    if "runtime-registration-file" in data:
        config.runtime_registration_file = _require_string(data, "runtime-registration-file", source_label)
    if "tools-registration-file" in data:
        config.tools_registration_file = _require_string(data, "tools-registration-file", source_label)
    if "jobs" in data:
        config.jobs = _require_positive_int(data, "jobs", source_label)
    return config


def default_config_text(schema: str = "Build/reflection-schema.json") -> str:
    """Return the starter configuration written by ``reflectgen init``."""
    return (
        "# reflectgen configuration\n"
        "# Paths are relative to this file.\n"
        "\n"
        f"schema: {schema}\n"
        "solution-directory: .\n"
        f"runtime-registration-file: {DEFAULT_RUNTIME_REGISTRATION_FILE}\n"
        f"tools-registration-file: {DEFAULT_TOOLS_REGISTRATION_FILE}\n"
        "jobs: 1\n"
    )


# ################
# Implementation
# ################


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a required string field from a mapping, raising GeneratorConfigError if missing."""
    if key not in mapping:
        raise GeneratorConfigError(f"{source_label}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str):
        raise GeneratorConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _require_positive_int(mapping: dict[str, object], key: str, source_label: str) -> int:
    value = mapping[key]
    # bool is an int subclass; reject `jobs: true`.
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise GeneratorConfigError(f"{source_label}: '{key}' must be a positive integer")
    return value
