"""
FastAPI routes for Service Health alert template generation.

The request body is validated by AlertTemplateRequest before the compiler
runs; the compiler itself never sees invalid input.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import PlainTextResponse
from pydantic.alias_generators import to_snake

from alert_bicep.api.schemas.alert import (
    AlertTemplateRequest,
    AlertTemplateResponse,
    FormValidationResponse,
)
from alert_bicep.compiler.document import RenderedTemplate, render_template
from alert_bicep.compiler.naming import make_short_name
from alert_bicep.core.config import settings
from alert_bicep.core.validators import validate_alert_form
from alert_bicep.domain.enums import ActionMode

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates", tags=["Templates"])


def _render(payload: AlertTemplateRequest) -> RenderedTemplate:
    return render_template(payload.to_input(), settings.render_options)


@router.post("/service-health-alert", response_model=AlertTemplateResponse)
def create_service_health_alert(payload: AlertTemplateRequest) -> AlertTemplateResponse:
    """
    Render a Service Health alert template.

    Quick action mode prepends a `quickAG` action group resource that the
    alert references as `quickAG.id`.
    """
    rendered = _render(payload)

    short_name = None
    if payload.action_mode == ActionMode.QUICK:
        short_name = make_short_name(payload.quick_short_name or payload.quick_action_group_name)

    return AlertTemplateResponse(
        template=rendered.text,
        resources=rendered.resources,
        condition_count=rendered.condition_count,
        short_name=short_name,
    )


@router.post(
    "/service-health-alert.bicep",
    response_class=PlainTextResponse,
    responses={200: {"content": {"text/plain": {}}}},
)
def create_service_health_alert_bicep(payload: AlertTemplateRequest) -> PlainTextResponse:
    """Render a Service Health alert template as plain Bicep text."""
    rendered = _render(payload)
    return PlainTextResponse(content=rendered.text, media_type="text/plain; charset=utf-8")


@router.post("/validate", response_model=FormValidationResponse)
def validate_alert(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """
    Validate raw form values field by field without rendering.

    Unlike the render endpoints, every field is checked so the form can
    highlight all problems at once. Always returns 200.
    """
    normalized = {to_snake(key): value for key, value in payload.items()}
    if "action_group_rg" in normalized:
        normalized.setdefault("action_group_resource_group", normalized.pop("action_group_rg"))

    result = validate_alert_form(normalized)
    if not result.is_valid:
        logger.info("Alert form failed validation", extra={"invalid_fields": sorted(result.errors)})
    return result.to_dict()
