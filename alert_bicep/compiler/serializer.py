"""
Bicep value serializer.

Turns a JSON-like value graph (strings, numbers, booleans, lists, mappings)
into Bicep object/array literal text.

Formatting policy:
- Empty containers collapse to `[]` / `{}`
- Short lists of scalars stay on one line: `[ 'a' 'b' ]`
- A mapping with a single scalar entry stays on one line: `{ key: value }`
- Everything else is one element (or `key: value` pair) per line

Strings are emitted verbatim. Callers that need a Bicep string literal must
pass an already quoted value (see `alert_bicep.compiler.conditions.quote`), which
lets symbolic references such as `quickAG.id` pass through unquoted.

The output is deterministic: the same value, indent and threshold always
produce byte-for-byte identical text.
"""

import re
from collections.abc import Mapping, Sequence

from alert_bicep.core.errors import RenderError

DslScalar = str | int | float | bool
DslValue = DslScalar | Sequence["DslValue"] | Mapping[str, "DslValue"]

DEFAULT_INDENT = "    "
DEFAULT_COMPACT_THRESHOLD = 2
INDENT_STEP = "  "

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_scalar(value: object) -> bool:
    """Return True for values rendered inline (str, int, float, bool)."""
    return isinstance(value, str | int | float | bool)


def quote_key(key: str) -> str:
    """
    Render a mapping key.

    Identifier-shaped keys are emitted bare, anything else becomes a
    single-quoted Bicep string with embedded quotes escaped.

    Example:
        >>> quote_key("abc1")
        'abc1'
        >>> quote_key("a-b")
        "'a-b'"
    """
    if _IDENTIFIER_PATTERN.match(key):
        return key
    return "'" + str(key).replace("'", "\\'") + "'"


def render_scalar(value: DslScalar) -> str:
    """Render a scalar in its canonical Bicep text form."""
    match value:
        case bool():
            return "true" if value else "false"
        case str():
            return value
        case int():
            return str(value)
        case float() if value.is_integer():
            return str(int(value))
        case float():
            return repr(value)
    raise RenderError(
        f"Unsupported scalar type: {type(value).__name__}",
        details={"type": type(value).__name__},
    )


def render(
    value: DslValue,
    indent: str = DEFAULT_INDENT,
    compact_threshold: int = DEFAULT_COMPACT_THRESHOLD,
) -> str:
    """
    Render a value as Bicep literal text.

    Args:
        value: Value to render (scalar, list/tuple, or mapping)
        indent: Indentation applied to the lines of this value
        compact_threshold: Maximum number of scalar list elements that may be
                           rendered on a single line

    Returns:
        Bicep source text for the value

    Raises:
        RenderError: If the value contains a type outside the Bicep value domain

    Example:
        >>> print(render({"enabled": True, "scopes": ["'/subscriptions/x'"]}, "  "))
        {
          enabled: true
          scopes: [ '/subscriptions/x' ]
          }

        The closing bracket sits at `indent`, the indent the caller passes, so
        it lines up with the children rather than with the opening line.
    """
    match value:
        case str() | bool() | int() | float():
            return render_scalar(value)
        case Mapping():
            return _render_mapping(value, indent, compact_threshold)
        case list() | tuple():
            return _render_list(value, indent, compact_threshold)
    raise RenderError(
        f"Cannot render value of type {type(value).__name__}",
        details={"type": type(value).__name__},
    )


def _render_list(items: Sequence[DslValue], indent: str, compact_threshold: int) -> str:
    if not items:
        return "[]"

    if len(items) <= compact_threshold and all(is_scalar(item) for item in items):
        return "[ " + " ".join(render(item, "", compact_threshold) for item in items) + " ]"

    lines = [indent + render(item, indent + INDENT_STEP, compact_threshold) for item in items]
    return "[\n" + "\n".join(lines) + "\n" + indent + "]"


def _render_mapping(entries: Mapping[str, DslValue], indent: str, compact_threshold: int) -> str:
    if not entries:
        return "{}"

    if len(entries) == 1:
        ((key, only),) = entries.items()
        if is_scalar(only):
            return f"{{ {quote_key(key)}: {render(only, '', compact_threshold)} }}"

    lines = [
        indent + quote_key(key) + ": " + render(item, indent + INDENT_STEP, compact_threshold)
        for key, item in entries.items()
    ]
    return "{\n" + "\n".join(lines) + "\n" + indent + "}"
