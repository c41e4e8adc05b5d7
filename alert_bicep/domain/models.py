"""
Plain input records for template rendering.

The compiler never reads request objects or settings directly; the API and
CLI layers convert validated input into these immutable records first.
"""

from dataclasses import dataclass

from alert_bicep.domain.enums import ActionMode


@dataclass(frozen=True)
class AlertTemplateInput:
    """Validated form values for one Service Health alert."""

    subscription_id: str
    alert_name: str
    services: tuple[str, ...] = ()
    event_types: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()
    # Collected by the form but not part of the Service Health condition schema
    severities: tuple[str, ...] = ()
    action_mode: ActionMode = ActionMode.EXISTING
    action_group_name: str = ""
    action_group_resource_group: str = ""
    existing_action_group_id: str | None = None
    quick_action_group_name: str = ""
    quick_email: str = ""
    quick_short_name: str = ""
    # Raw (key, value) rows in entry order; keys are sanitized during rendering
    tags: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class RenderOptions:
    """Formatting and resource versions used when rendering a template."""

    indent: str = "    "
    compact_threshold: int = 2
    alert_api_version: str = "2023-01-01-preview"
    action_group_api_version: str = "2019-06-01"
