"""CLI wrapper: Run unit tests (APP_ENV=test)."""

from __future__ import annotations

import os
import sys

from cli._runner import run


def main() -> None:
    os.environ.setdefault("APP_ENV", "test")
    os.environ.setdefault("OBSERVABILITY_STRUCTURED_LOGS", "false")
    run([sys.executable, "-m", "pytest", "-q", *sys.argv[1:]])
