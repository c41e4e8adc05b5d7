"""
Condition tree assembly for Service Health activity-log alerts.

An alert condition is an `allOf` list whose first entry always restricts the
activity log to the ServiceHealth category. Each selection dimension
(services, event types, regions) then contributes at most one clause:

- no selection       -> no clause
- one selection      -> a bare `{field, equals}` leaf
- several selections -> an `anyOf` over one leaf per selection

The policy is applied independently per dimension.

All field paths and compared values enter the tree as quoted Bicep literals,
so the serializer can emit them verbatim.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from alert_bicep.compiler.serializer import DslValue
from alert_bicep.domain.enums import ConditionField

SERVICE_HEALTH_CATEGORY = "ServiceHealth"


def quote(value: str) -> str:
    """
    Quote a value as a Bicep single-quoted string literal.

    Example:
        >>> quote("it's")
        "'it\\\\'s'"
    """
    return "'" + str(value).replace("'", "\\'") + "'"


@dataclass(frozen=True)
class FieldEquals:
    """Leaf condition: `field` equals `equals` (both quoted literals)."""

    field: str
    equals: str


@dataclass(frozen=True)
class AnyOf:
    """Disjunction of conditions."""

    conditions: tuple["Condition", ...]


@dataclass(frozen=True)
class AllOf:
    """Conjunction of conditions (top level of an alert condition)."""

    conditions: tuple["Condition", ...]


Condition = FieldEquals | AnyOf


def field_equals(field: ConditionField | str, value: str) -> FieldEquals:
    """Build a leaf condition, quoting both the field path and the value."""
    path = field.value if isinstance(field, ConditionField) else field
    return FieldEquals(field=quote(path), equals=quote(value))


def _dimension_clause(field: ConditionField, values: Sequence[str] | None) -> Condition | None:
    """Apply the 0 / 1 / many policy for one selection dimension."""
    if not values:
        return None
    if len(values) == 1:
        return field_equals(field, values[0])
    return AnyOf(conditions=tuple(field_equals(field, value) for value in values))


def build_conditions(
    services: Sequence[str] | None,
    event_types: Sequence[str] | None,
    regions: Sequence[str] | None,
) -> list[Condition]:
    """
    Build the `allOf` entries for a Service Health alert.

    Args:
        services: Selected service names (impacted services)
        event_types: Selected incident types (Incident, Maintenance, ...)
        regions: Selected region names

    Returns:
        Ordered list of conditions: the category filter first, followed by
        the services, event type and region clauses that apply

    Example:
        >>> conditions = build_conditions(["Storage", "Compute"], ["Incident"], [])
        >>> len(conditions)
        3
        >>> isinstance(conditions[1], AnyOf)
        True
    """
    conditions: list[Condition] = [field_equals(ConditionField.CATEGORY, SERVICE_HEALTH_CATEGORY)]

    for field, values in (
        (ConditionField.SERVICE_NAME, services),
        (ConditionField.INCIDENT_TYPE, event_types),
        (ConditionField.REGION_NAME, regions),
    ):
        clause = _dimension_clause(field, values)
        if clause is not None:
            conditions.append(clause)

    return conditions


def to_dsl(condition: Condition | AllOf) -> DslValue:
    """
    Convert a condition tree into the mapping shape of the alert schema.

    Leaves become `{field, equals}`, disjunctions `{anyOf: [...]}` and the
    top-level conjunction `{allOf: [...]}`.
    """
    match condition:
        case FieldEquals(field=field, equals=equals):
            return {"field": field, "equals": equals}
        case AnyOf(conditions=children):
            return {"anyOf": [to_dsl(child) for child in children]}
        case AllOf(conditions=children):
            return {"allOf": [to_dsl(child) for child in children]}
    raise TypeError(f"Unknown condition node: {type(condition).__name__}")
