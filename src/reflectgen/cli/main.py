# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the reflectgen command-line interface."""

import argparse
import sys
from pathlib import Path

from yachalk import chalk

from reflectgen.codegen.errors import SchemaInvariantError
from reflectgen.codegen.generator import RegistrationPaths, generate_solution
from reflectgen.codegen.sink import write_generated_files
from reflectgen.database.schema_file import SchemaFileError, load_schema
from reflectgen.database.store import ReflectionDatabase
from reflectgen.logging import configure_logging
from reflectgen.validation.checks import validate
from reflectgen.workspace.config import (
    CONFIG_FILE_NAME,
    GeneratorConfig,
    GeneratorConfigError,
    default_config_text,
    load_generator_config,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the reflectgen CLI."""
    parser = argparse.ArgumentParser(
        prog="reflectgen",
        description="reflectgen: C++ type reflection code generator",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Create a starter generator configuration",
        description=f"Write a starter {CONFIG_FILE_NAME} into a solution directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the configuration to (default: current directory)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check the consistency of the reflection schema",
        description="Validate the reflection schema without generating any code.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help=f"Directory containing {CONFIG_FILE_NAME} (default: current directory)",
    )

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate type registration code",
        description="Generate per-header type info, per-project modules and the solution registration files.",
    )
    generate_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help=f"Directory containing {CONFIG_FILE_NAME} (default: current directory)",
    )
    generate_parser.add_argument(
        "--jobs",
        type=int,
        default=None,
        help="Worker threads for per-project generation (default: value from the configuration)",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate in memory and report the files without writing them",
    )
    generate_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "generate":
        return _cmd_generate(args)
    return 0


def _error(message: str) -> None:
    print(f"{chalk.red('Error:')} {message}", file=sys.stderr)


def _warning(message: str) -> None:
    print(f"{chalk.yellow('Warning:')} {message}")


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        _error(f"directory '{directory}' does not exist.")
        return 1

    config_file = directory / CONFIG_FILE_NAME

    if config_file.exists():
        _error(f"configuration already exists at '{config_file}'.")
        return 1

    config_file.write_text(default_config_text(), encoding="utf-8")
    print(f"Initialized reflectgen configuration at '{config_file}'.")
    return 0


def _load_database(directory: Path) -> tuple[GeneratorConfig, ReflectionDatabase] | None:
    """Load the configuration and schema below *directory*, reporting failures."""
    if not directory.exists():
        _error(f"directory '{directory}' does not exist.")
        return None

    config_file = directory / CONFIG_FILE_NAME
    if not config_file.exists():
        _error(
            f"no reflectgen configuration found at '{directory}'. Run 'reflectgen init' to create one.",
        )
        return None

    try:
        config = load_generator_config(config_file)
        schema = load_schema(directory / config.schema)
    except (GeneratorConfigError, SchemaFileError) as exc:
        _error(str(exc))
        return None
    return config, ReflectionDatabase(schema)


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    loaded = _load_database(Path(args.directory).resolve())
    if loaded is None:
        return 1
    _, db = loaded

    result = validate(db)
    for warning in result.warnings:
        _warning(warning.message)
    for error in result.errors:
        _error(error.message)

    if result.has_errors:
        return 1

    print("No issues found.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    configure_logging(verbose=args.verbose)
    directory = Path(args.directory).resolve()
    loaded = _load_database(directory)
    if loaded is None:
        return 1
    config, db = loaded

    jobs = args.jobs if args.jobs is not None else config.jobs
    if jobs < 1:
        _error("--jobs must be a positive integer.")
        return 1

    paths = RegistrationPaths(
        runtime=config.runtime_registration_file,
        tools=config.tools_registration_file,
    )
    try:
        result = generate_solution(db, paths=paths, jobs=jobs)
    except SchemaInvariantError as exc:
        _error(f"inconsistent schema: {exc.message}")
        return 1

    if result.error is not None:
        _error(result.error.message)
        return 1

    if args.dry_run:
        for generated in result.files:
            print(generated.path)
        print(f"Would generate {len(result.files)} file(s).")
        return 0

    written = write_generated_files(result.files, directory / config.solution_directory)
    print(f"Generated {len(result.files)} file(s), {len(written)} updated.")
    return 0
