"""
Field-level validators for alert form input.

Each validator returns a FieldValidation with a pass/fail flag and a
human-readable message for the form. Pydantic schemas reuse the same
validators and raise the message as a ValueError.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

GUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Characters rejected in Azure resource names
ALERT_NAME_INVALID_CHARS = re.compile(r"[<>%&\\?/]")
ALERT_NAME_MIN_LENGTH = 3
ALERT_NAME_MAX_LENGTH = 260

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class FieldValidation:
    """Outcome of validating one form field."""

    is_valid: bool
    message: str = ""


VALID = FieldValidation(is_valid=True)


def _not_text(value: Any) -> bool:
    return value is not None and not isinstance(value, str)


def _text_expected(label: str) -> FieldValidation:
    return FieldValidation(False, f"{label} must be a text value.")


@dataclass
class FormValidation:
    """Outcome of validating a whole alert form."""

    fields: dict[str, FieldValidation] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return all(result.is_valid for result in self.fields.values())

    @property
    def errors(self) -> dict[str, str]:
        return {name: r.message for name, r in self.fields.items() if not r.is_valid}

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "fields": {name: asdict(result) for name, result in self.fields.items()},
        }


def validate_subscription_id(value: str | None) -> FieldValidation:
    """
    Validate an Azure subscription ID (GUID with hyphens).

    Args:
        value: Raw subscription ID from the form

    Returns:
        FieldValidation describing the first problem found, if any
    """
    if _not_text(value):
        return _text_expected("Subscription ID")

    if not value or not value.strip():
        return FieldValidation(
            False,
            "Subscription ID is required. Enter your Azure subscription ID to scope the alert.",
        )

    clean_value = value.strip()

    if "-" not in clean_value:
        return FieldValidation(
            False,
            "Subscription ID appears to be missing hyphens. "
            "Expected format: 00000000-0000-0000-0000-000000000000",
        )

    if not GUID_PATTERN.match(clean_value):
        return FieldValidation(
            False,
            "Invalid Subscription ID format. Expected: "
            "00000000-0000-0000-0000-000000000000 (36 characters with hyphens)",
        )

    return VALID


def validate_alert_name(value: str | None) -> FieldValidation:
    """
    Validate an alert name against Azure resource naming rules.

    Args:
        value: Raw alert name from the form

    Returns:
        FieldValidation describing the first problem found, if any
    """
    if _not_text(value):
        return _text_expected("Alert Name")

    if not value or not value.strip():
        return FieldValidation(
            False, "Alert Name is required. Provide a descriptive name for this alert."
        )

    trimmed = value.strip()

    if len(trimmed) < ALERT_NAME_MIN_LENGTH:
        return FieldValidation(
            False,
            f"Alert Name is too short ({len(trimmed)} chars). "
            f"Minimum {ALERT_NAME_MIN_LENGTH} characters required.",
        )

    if len(trimmed) > ALERT_NAME_MAX_LENGTH:
        return FieldValidation(
            False,
            f"Alert Name is too long ({len(trimmed)} chars). "
            f"Maximum {ALERT_NAME_MAX_LENGTH} characters allowed.",
        )

    found = ALERT_NAME_INVALID_CHARS.findall(trimmed)
    if found:
        return FieldValidation(
            False,
            f"Alert Name contains invalid characters: {', '.join(found)}. "
            "Use letters, numbers, spaces, and hyphens only.",
        )

    return VALID


def validate_selection(values: Sequence[str] | None, field_name: str) -> FieldValidation:
    """Require a list holding at least one non-empty selected value."""
    if values is not None and not isinstance(values, (list, tuple)):
        return FieldValidation(False, f"Expected a list of {field_name} selections.")
    selected = [v for v in (values or []) if isinstance(v, str) and v != ""]
    if not selected:
        return FieldValidation(
            False,
            f"Please select at least one {field_name}. Use Ctrl/Cmd+Click to select multiple.",
        )
    return VALID


def validate_required(value: str | None, field_name: str) -> FieldValidation:
    """Require a non-blank text value."""
    if _not_text(value):
        return _text_expected(field_name)
    if not value or not value.strip():
        return FieldValidation(False, f"{field_name} is required.")
    return VALID


def validate_email(value: str | None) -> FieldValidation:
    """Validate a notification email address."""
    required = validate_required(value, "Email")
    if not required.is_valid:
        return required
    if not EMAIL_PATTERN.match(value.strip()):
        return FieldValidation(False, f"'{value.strip()}' is not a valid email address.")
    return VALID


def validate_alert_form(payload: Mapping[str, Any]) -> FormValidation:
    """
    Validate every field of a raw alert form payload.

    Runs all checks (rather than stopping at the first failure) so the form
    can flag each invalid field at once. Action group fields are checked
    according to `action_mode`.

    Args:
        payload: Raw form values keyed by the request schema's field names

    Returns:
        FormValidation with one entry per checked field
    """
    result = FormValidation()
    result.fields["subscription_id"] = validate_subscription_id(payload.get("subscription_id"))
    result.fields["alert_name"] = validate_alert_name(payload.get("alert_name"))
    result.fields["services"] = validate_selection(payload.get("services"), "service")
    result.fields["event_types"] = validate_selection(payload.get("event_types"), "event type")
    result.fields["regions"] = validate_selection(payload.get("regions"), "region")
    result.fields["severities"] = validate_selection(payload.get("severities"), "severity level")

    mode = payload.get("action_mode") or "existing"
    if hasattr(mode, "value"):
        mode = mode.value

    if mode == "quick":
        result.fields["quick_action_group_name"] = validate_required(
            payload.get("quick_action_group_name"), "Action Group Name"
        )
        result.fields["quick_email"] = validate_email(payload.get("quick_email"))
    elif not payload.get("existing_action_group_id"):
        result.fields["action_group_name"] = validate_required(
            payload.get("action_group_name"), "Action Group Name"
        )
        result.fields["action_group_resource_group"] = validate_required(
            payload.get("action_group_resource_group"), "Action Group Resource Group"
        )

    return result
