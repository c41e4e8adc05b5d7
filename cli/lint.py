"""CLI wrapper: Lint and format-check the package, CLI and tests."""

from __future__ import annotations

import subprocess
import sys

TARGETS = ["alert_bicep", "cli", "tests"]


def main() -> None:
    check = subprocess.run(
        [sys.executable, "-m", "ruff", "check", *TARGETS, *sys.argv[1:]], check=False
    )
    fmt = subprocess.run([sys.executable, "-m", "ruff", "format", "--check", *TARGETS], check=False)
    raise SystemExit(check.returncode or fmt.returncode)
