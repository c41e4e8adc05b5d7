"""
Bicep template compiler for Service Health alerts.

This package turns validated alert form input into Bicep source text.

Key Components:
- serializer: Renders JSON-like values as Bicep object/array literals
- conditions: Builds the allOf / anyOf condition tree
- permissions: Completes action lists in role permission blocks
- naming: Action group short names and tag key sanitization
- document: Assembles the alert (and optional quick action group) resources

Design Principles:
- Determinism: Same input produces byte-for-byte identical output
- Purity: No I/O, settings or request objects inside the compiler
- Minimal output: Single selections render as bare conditions
"""

from alert_bicep.compiler.conditions import AllOf, AnyOf, FieldEquals, build_conditions, quote
from alert_bicep.compiler.document import RenderedTemplate, render_template
from alert_bicep.compiler.naming import make_short_name, sanitize_tag_key
from alert_bicep.compiler.permissions import ensure_permissions_actions
from alert_bicep.compiler.serializer import render

__all__ = [
    "AllOf",
    "AnyOf",
    "FieldEquals",
    "RenderedTemplate",
    "build_conditions",
    "ensure_permissions_actions",
    "make_short_name",
    "quote",
    "render",
    "render_template",
    "sanitize_tag_key",
]
