#!/usr/bin/env python3
"""Composite quality gate: type checking plus per-package test coverage."""

from __future__ import annotations

import argparse
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class _TestSuite:
    name: str
    tests: str
    package: str
    min_coverage: int


_SUITES = (
    _TestSuite(name="flowkit", tests="tests/flowkit", package="flowkit", min_coverage=85),
    _TestSuite(
        name="itembrowser", tests="tests/itembrowser", package="itembrowser", min_coverage=75
    ),
)


def _run(label: str, command: list[str], env: dict[str, str]) -> None:
    print(label, flush=True)
    completed = subprocess.run(command, env=env, check=False)
    if completed.returncode != 0:
        raise SystemExit(f"{label} failed with exit code {completed.returncode}.")


def _pytest_command(suite: _TestSuite) -> list[str]:
    return [
        "uv",
        "run",
        "pytest",
        suite.tests,
        f"--cov={suite.package}",
        "--cov-report=term-missing",
        f"--cov-fail-under={suite.min_coverage}",
    ]


def main() -> int:
    parser = argparse.ArgumentParser(description="Run repository quality checks.")
    parser.add_argument("--skip-typecheck", action="store_true")
    parser.add_argument(
        "--skip",
        action="append",
        default=[],
        choices=[suite.name for suite in _SUITES],
        help="skip the named test suite (repeatable)",
    )
    args = parser.parse_args()

    os.chdir(Path(__file__).resolve().parent.parent)
    env = {**os.environ, "PYTHONPATH": "."}

    if not args.skip_typecheck:
        _run("Running mypy...", ["uv", "run", "mypy"], env)
    for suite in _SUITES:
        if suite.name in args.skip:
            continue
        _run(f"Running {suite.name} tests with coverage gate...", _pytest_command(suite), env)

    print("All selected checks passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
