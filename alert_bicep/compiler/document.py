"""
Service Health alert template assembly.

Builds the alert properties document from validated form input and renders
the complete Bicep template:

    [resource quickAG ...]          (quick action mode only)
    resource serviceHealthAlert ...

The resource symbolic names, property keys and condition field paths are a
fixed contract with the templates' consumers.
"""

import logging
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from alert_bicep.compiler.conditions import AllOf, build_conditions, quote, to_dsl
from alert_bicep.compiler.naming import make_short_name, sanitize_tag_key
from alert_bicep.compiler.permissions import ensure_permissions_actions
from alert_bicep.compiler.serializer import render
from alert_bicep.core.errors import RenderError, ValidationError
from alert_bicep.domain.enums import ActionMode, ResourceName
from alert_bicep.domain.models import AlertTemplateInput, RenderOptions

logger = logging.getLogger(__name__)

ALERT_RESOURCE_TYPE = "Microsoft.Insights/activityLogAlerts"
ACTION_GROUP_RESOURCE_TYPE = "Microsoft.Insights/actionGroups"
GLOBAL_LOCATION = "global"
QUICK_RECEIVER_NAME = "default"


@dataclass
class RenderedTemplate:
    """Result of rendering one alert request."""

    text: str
    resources: list[str] = field(default_factory=list)
    properties: dict = field(default_factory=dict)
    condition_count: int = 0


def action_group_id(subscription_id: str, resource_group: str, name: str) -> str:
    """Build the resource ID of an existing action group."""
    return (
        f"/subscriptions/{subscription_id}/resourceGroups/{resource_group}"
        f"/providers/microsoft.insights/actionGroups/{name}"
    )


def build_description(
    services: Sequence[str], event_types: Sequence[str], regions: Sequence[str]
) -> str:
    """
    Build the human-readable alert description.

    Example:
        >>> build_description(["Storage", "Compute"], ["Incident"], ["West Europe"])
        'Service Health alert for Storage, Compute (Incident) in West Europe'
    """
    description = f"Service Health alert for {', '.join(services)} ({', '.join(event_types)})"
    if regions:
        description += f" in {','.join(regions)}"
    return description


def build_tags(rows: Iterable[tuple[str, str]]) -> dict[str, str]:
    """
    Turn raw tag rows into the template's tag mapping.

    Keys are sanitized, rows whose key sanitizes to nothing are dropped, and
    values are quoted. A later row wins when two keys sanitize to the same
    value.
    """
    tags: dict[str, str] = {}
    for raw_key, raw_value in rows:
        key = sanitize_tag_key(raw_key)
        if not key:
            continue
        tags[key] = quote(str(raw_value or ""))
    return tags


def build_action_groups(request: AlertTemplateInput) -> list[dict[str, str]]:
    """
    Build the `actionGroups` list for the alert.

    Quick mode references the inline `quickAG` resource symbolically;
    existing mode references the action group by resource ID.

    Raises:
        ValidationError: If quick mode lacks the group name or email
        RenderError: If existing mode lacks both an explicit ID and a name/resource group
    """
    if request.action_mode == ActionMode.QUICK:
        if not request.quick_action_group_name or not request.quick_email:
            raise ValidationError(
                "Quick action mode requires an action group name and email",
                details={"action_mode": request.action_mode.value},
            )
        return [{"actionGroupId": f"{ResourceName.QUICK_ACTION_GROUP.value}.id"}]

    group_id = request.existing_action_group_id
    if not group_id:
        if not request.action_group_name or not request.action_group_resource_group:
            raise RenderError(
                "Existing action mode requires an action group ID or name and resource group",
                details={"action_mode": request.action_mode.value},
            )
        group_id = action_group_id(
            request.subscription_id,
            request.action_group_resource_group,
            request.action_group_name,
        )
    return [{"actionGroupId": quote(group_id)}]


def build_alert_properties(request: AlertTemplateInput) -> dict:
    """
    Build the `properties` object of the activity log alert.

    Args:
        request: Validated alert input

    Returns:
        Properties mapping with keys enabled, scopes, condition, actions and
        description (in that order), normalized for permission blocks
    """
    conditions = build_conditions(request.services, request.event_types, request.regions)

    properties = {
        "enabled": True,
        "scopes": [quote(f"/subscriptions/{request.subscription_id}")],
        "condition": to_dsl(AllOf(conditions=tuple(conditions))),
        "actions": {"actionGroups": build_action_groups(request)},
        "description": quote(
            build_description(request.services, request.event_types, request.regions)
        ),
    }
    return ensure_permissions_actions(properties)


def render_quick_action_group(
    name: str,
    email: str,
    short_name: str | None = None,
    api_version: str = RenderOptions.action_group_api_version,
) -> str:
    """
    Render the inline action group declared in quick mode.

    The group short name is derived from `short_name` when given, otherwise
    from the display name.
    """
    group_short_name = make_short_name(short_name or name)
    return (
        f"resource {ResourceName.QUICK_ACTION_GROUP.value} "
        f"'{ACTION_GROUP_RESOURCE_TYPE}@{api_version}' = {{\n"
        f"  name: {quote(name)}\n"
        f"  location: {quote(GLOBAL_LOCATION)}\n"
        "  properties: {\n"
        f"    groupShortName: {quote(group_short_name)}\n"
        "    enabled: true\n"
        "    emailReceivers: [\n"
        "      {\n"
        f"        name: {quote(QUICK_RECEIVER_NAME)}\n"
        f"        emailAddress: {quote(email)}\n"
        "      }\n"
        "    ]\n"
        "  }\n"
        "}\n"
    )


def render_alert_resource(
    alert_name: str,
    properties: dict,
    tags: dict[str, str] | None = None,
    options: RenderOptions | None = None,
) -> str:
    """Render the `serviceHealthAlert` resource declaration."""
    options = options or RenderOptions()

    tags_block = ""
    if tags:
        tags_block = "\n  tags: " + render(tags, options.indent, options.compact_threshold)

    return (
        f"resource {ResourceName.ALERT.value} "
        f"'{ALERT_RESOURCE_TYPE}@{options.alert_api_version}' = {{\n"
        f"  name: {quote(alert_name)}\n"
        f"  location: {quote(GLOBAL_LOCATION)}{tags_block}\n"
        f"  properties: {render(properties, options.indent, options.compact_threshold)}\n"
        "}\n"
    )


def render_template(
    request: AlertTemplateInput, options: RenderOptions | None = None
) -> RenderedTemplate:
    """
    Render the full Bicep template for an alert request.

    Args:
        request: Validated alert input
        options: Formatting and API version options (defaults apply when omitted)

    Returns:
        RenderedTemplate with the template text, declared resource names, the
        properties document and the number of top-level conditions

    Raises:
        ValidationError: If quick mode lacks the action group name or email
        RenderError: If the input cannot be turned into a template
    """
    options = options or RenderOptions()
    start_time = time.time()

    try:
        properties = build_alert_properties(request)
        tags = build_tags(request.tags)

        parts: list[str] = []
        resources: list[str] = []
        if request.action_mode == ActionMode.QUICK:
            parts.append(
                render_quick_action_group(
                    request.quick_action_group_name,
                    request.quick_email,
                    request.quick_short_name,
                    api_version=options.action_group_api_version,
                )
            )
            resources.append(ResourceName.QUICK_ACTION_GROUP.value)

        parts.append(render_alert_resource(request.alert_name, properties, tags, options))
        resources.append(ResourceName.ALERT.value)
        text = "".join(parts)
    except Exception:
        _record_render_metrics("error", request.action_mode, time.time() - start_time, 0)
        raise

    duration = time.time() - start_time
    template_bytes = len(text.encode("utf-8"))
    condition_count = len(properties["condition"]["allOf"])

    logger.info(
        "Rendered alert template %s: %d conditions, mode=%s, duration=%.4fs, size=%d bytes",
        request.alert_name,
        condition_count,
        request.action_mode.value,
        duration,
        template_bytes,
    )
    _record_render_metrics("success", request.action_mode, duration, template_bytes)

    return RenderedTemplate(
        text=text,
        resources=resources,
        properties=properties,
        condition_count=condition_count,
    )


def _record_render_metrics(
    status: str, action_mode: ActionMode, duration: float, template_bytes: int
) -> None:
    """
    Record template rendering metrics to Prometheus.

    Metrics failures are logged and never break rendering.
    """
    try:
        from alert_bicep.core.observability import metrics

        metrics.template_renders_total.labels(status=status, action_mode=action_mode.value).inc()
        metrics.template_render_duration_seconds.observe(duration)
        if status == "success":
            metrics.template_bytes.observe(template_bytes)
    except Exception:
        logger.debug("Failed to record render metrics", exc_info=True)
