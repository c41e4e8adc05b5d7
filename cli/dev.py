"""CLI wrapper: Serve the template API locally with auto-reload.

Host and port come from DEV_HOST / DEV_PORT (default 127.0.0.1:8000); the
log level follows APP_LOG_LEVEL.
"""

from __future__ import annotations

import os
import sys

from cli._runner import run


def main() -> None:
    run(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "alert_bicep.main:app",
            "--reload",
            "--reload-dir",
            "alert_bicep",
            "--host",
            os.getenv("DEV_HOST", "127.0.0.1"),
            "--port",
            os.getenv("DEV_PORT", "8000"),
            "--log-level",
            os.getenv("APP_LOG_LEVEL", "info").lower(),
            *sys.argv[1:],
        ]
    )
