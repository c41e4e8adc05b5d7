"""Render Service Health alert templates from the command line.

Usage:
    uv run alert-bicep render request.json [-o main.bicep] [--json]
    uv run alert-bicep options services

The request file holds the same JSON body the API accepts
(snake_case or camelCase field names).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from alert_bicep.api.schemas.alert import AlertTemplateRequest
from alert_bicep.compiler.document import render_template
from alert_bicep.core.config import settings
from alert_bicep.core.errors import AlertBicepError
from alert_bicep.services.option_loader import load_options

logger = logging.getLogger("alert_bicep.cli")

EXIT_INVALID_INPUT = 2


def _load_request(path: str) -> dict:
    source = sys.stdin if path == "-" else Path(path).open(encoding="utf-8")
    with source:
        return json.load(source)


def _format_validation_errors(exc: PydanticValidationError) -> str:
    lines = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "request"
        lines.append(f"  {location}: {error['msg']}")
    return "Invalid alert request:\n" + "\n".join(lines)


def cmd_render(args: argparse.Namespace) -> int:
    try:
        payload = AlertTemplateRequest.model_validate(_load_request(args.request))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Cannot read {args.request}: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except PydanticValidationError as exc:
        print(_format_validation_errors(exc), file=sys.stderr)
        return EXIT_INVALID_INPUT

    rendered = render_template(payload.to_input(), settings.render_options)

    if args.json:
        output = json.dumps(
            {
                "template": rendered.text,
                "resources": rendered.resources,
                "condition_count": rendered.condition_count,
            },
            indent=2,
        )
    else:
        output = rendered.text

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        logger.info("Wrote %s (%d resources)", args.output, len(rendered.resources))
    else:
        sys.stdout.write(output)
    return 0


def cmd_options(args: argparse.Namespace) -> int:
    for option in load_options(args.kind, settings.options_data_dir):
        print(f"{option['value']}\t{option['label']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alert-bicep", description="Generate Service Health alert Bicep templates"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show info logs")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render a template from a request file")
    render_parser.add_argument("request", help="Request JSON file ('-' for stdin)")
    render_parser.add_argument("--output", "-o", help="Write the template to this file")
    render_parser.add_argument(
        "--json", action="store_true", help="Print template and metadata as JSON"
    )
    render_parser.set_defaults(func=cmd_render)

    options_parser = subparsers.add_parser("options", help="Print a selection list")
    options_parser.add_argument("kind", help="services, eventTypes, regions or severity")
    options_parser.set_defaults(func=cmd_options)

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        code = args.func(args)
    except AlertBicepError as exc:
        print(f"{exc.__class__.__name__}: {exc.message}", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
