"""CLI wrapper: Write the OpenAPI schema of the template API to docs/openapi.json."""

from __future__ import annotations

import json
import sys
from pathlib import Path


def main() -> None:
    from alert_bicep.main import create_app

    output_file = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("docs") / "openapi.json"
    output_file.parent.mkdir(parents=True, exist_ok=True)

    schema = create_app().openapi()
    output_file.write_text(json.dumps(schema, indent=2) + "\n", encoding="utf-8")

    print(f"[OK] OpenAPI schema generated: {output_file}")
    for path, methods in schema["paths"].items():
        for method, details in methods.items():
            print(f"   {method.upper():6} {path:45} {details.get('summary', '')}")
