#!/usr/bin/env python3
# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the local CI pipeline for reflectgen and print a coloured summary."""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=reflectgen", "--cov-report=term-missing"]),
    ("Build", ["uv", "build"]),
]


def main(argv: list[str] | None = None) -> int:
    """Run the CI steps named in *argv* (all steps when empty) and report results."""
    selected = _select_steps(argv if argv is not None else sys.argv[1:])
    if not selected:
        print(chalk.red("No matching CI steps."), file=sys.stderr)
        return 2

    results = [_run_step(name, cmd) for name, cmd in selected]
    _print_summary(results)
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _select_steps(names: list[str]) -> list[tuple[str, list[str]]]:
    if not names:
        return list(STEPS)
    wanted = {n.lower() for n in names}
    return [(name, cmd) for name, cmd in STEPS if name.lower() in wanted]


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue(name))
    print(chalk.blue(_RULE))
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=Path(__file__).resolve().parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]]) -> None:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(_RULE))
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {'PASS' if passed else 'FAIL'}  {name} ({elapsed:.1f}s)"))
    print()


if __name__ == "__main__":
    sys.exit(main())
