#!/usr/bin/env python3
# Copyright 2026 Hermes Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the Hermes CI checks locally.

Usage: ``python tools/ci.py [--fail-fast] [STEP ...]`` where each STEP is one
of the keys in :data:`STEPS` (default: all of them, in order).
"""

import argparse
import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: dict[str, tuple[str, list[str]]] = {
    "format": ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    "lint": ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    "types": ("Type check", ["uv", "run", "ty", "check", "src/"]),
    "tests": ("Tests", ["uv", "run", "pytest", "--cov=hermes", "--cov-report=term-missing"]),
    "build": ("Build", ["uv", "build"]),
}


def main() -> int:
    """Run the selected CI steps and print a summary."""
    parser = argparse.ArgumentParser(description="Run Hermes CI checks locally.")
    parser.add_argument("steps", nargs="*", metavar="STEP", help=f"Steps to run: {', '.join(STEPS)}")
    parser.add_argument("--fail-fast", action="store_true", help="Stop after the first failing step")
    args = parser.parse_args()

    unknown = [key for key in args.steps if key not in STEPS]
    if unknown:
        parser.error(f"unknown step(s): {', '.join(unknown)}")

    selected = args.steps or list(STEPS)
    results: list[tuple[str, bool, float]] = []
    for key in selected:
        title, cmd = STEPS[key]
        _banner(title)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_REPO_ROOT)
        passed = proc.returncode == 0
        results.append((title, passed, time.monotonic() - start))
        if not passed and args.fail_fast:
            break

    _banner("Summary")
    for title, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        print(colour(f"  {'PASS' if passed else 'FAIL'}  {title} ({elapsed:.1f}s)"))
    skipped = selected[len(results) :]
    for key in skipped:
        print(chalk.yellow(f"  SKIP  {STEPS[key][0]}"))
    print()
    return 0 if all(passed for _, passed, _ in results) and not skipped else 1


# ################
# Implementation
# ################

_REPO_ROOT = Path(__file__).resolve().parent.parent


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}\n{chalk.blue(title)}\n{sep}")


if __name__ == "__main__":
    sys.exit(main())
