#!/usr/bin/env python3
# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, and build."""

import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=teeny", "--cov-report=term-missing"]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run every CI step and report results."""
    results = [_run_step(name, cmd) for name, cmd in STEPS]
    _print_summary(results)
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    """Run one step from the repository root and time it."""
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue(name))
    print(chalk.blue(_RULE))
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=pathlib.Path(__file__).parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]]) -> None:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(_RULE))
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(colour(f"  {status}  {name} ({elapsed:.1f}s)"))
    print()


if __name__ == "__main__":
    sys.exit(main())
