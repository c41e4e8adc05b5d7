"""
Shared helper for the tooling wrappers (dev server, tests, lint).

Runs a command and propagates its exit code, so `uv run <script>` behaves
like running the wrapped tool directly.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence


def run(cmd: Sequence[str]) -> None:
    """
    Run a command and exit with its return code.

    Example:
        >>> run([sys.executable, "-m", "pytest", "-q"])
    """
    raise SystemExit(subprocess.run(cmd, check=False).returncode)
