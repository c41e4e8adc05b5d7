"""
Pydantic schemas for alert template requests and responses.

Field names are snake_case; camelCase aliases (subscriptionId, eventTypes,
quickEmail, ...) are accepted as well so the browser form can post its raw
field names.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from alert_bicep.core.validators import (
    FieldValidation,
    validate_alert_name,
    validate_email,
    validate_required,
    validate_selection,
    validate_subscription_id,
)
from alert_bicep.domain.enums import ActionMode
from alert_bicep.domain.models import AlertTemplateInput

_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _raise_if_invalid(result: FieldValidation) -> None:
    if not result.is_valid:
        raise ValueError(result.message)


class TagRow(BaseModel):
    """One key/value row from the tag editor."""

    model_config = _CAMEL_CONFIG

    key: str = Field(default="", max_length=512)
    value: str = Field(default="", max_length=256)


class AlertTemplateRequest(BaseModel):
    """Alert form submission."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "subscription_id": "00000000-0000-0000-0000-000000000000",
                    "alert_name": "storage-health",
                    "services": ["Storage", "Virtual Machines"],
                    "event_types": ["Incident", "Maintenance"],
                    "regions": ["West Europe"],
                    "severities": ["Sev1"],
                    "action_mode": "quick",
                    "quick_action_group_name": "Ops Team",
                    "quick_email": "ops@example.com",
                    "tags": [{"key": "env", "value": "prod"}],
                }
            ]
        },
    )

    subscription_id: str = Field(..., description="Azure subscription ID (GUID)")
    alert_name: str = Field(..., description="Activity log alert resource name")
    services: list[str] = Field(default_factory=list, description="Impacted services")
    event_types: list[str] = Field(default_factory=list, description="Incident types")
    regions: list[str] = Field(default_factory=list, description="Impacted regions")
    severities: list[str] = Field(default_factory=list, description="Severity levels")
    action_mode: ActionMode = Field(default=ActionMode.EXISTING)
    action_group_name: str = ""
    action_group_resource_group: str = Field(default="", alias="actionGroupRg")
    existing_action_group_id: str | None = None
    quick_action_group_name: str = ""
    quick_email: str = ""
    quick_short_name: str = ""
    tags: list[TagRow] = Field(default_factory=list)

    @field_validator(
        "subscription_id",
        "alert_name",
        "action_group_name",
        "action_group_resource_group",
        "quick_action_group_name",
        "quick_email",
        "quick_short_name",
        mode="before",
    )
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        """Trim surrounding whitespace from text inputs."""
        return v.strip() if isinstance(v, str) else v

    @field_validator("services", "event_types", "regions", "severities", mode="after")
    @classmethod
    def drop_blank_selections(cls, v: list[str]) -> list[str]:
        """Ignore placeholder (empty) options."""
        return [item for item in v if item != ""]

    @field_validator("subscription_id")
    @classmethod
    def check_subscription_id(cls, v: str) -> str:
        _raise_if_invalid(validate_subscription_id(v))
        return v

    @field_validator("alert_name")
    @classmethod
    def check_alert_name(cls, v: str) -> str:
        _raise_if_invalid(validate_alert_name(v))
        return v

    @field_validator("services")
    @classmethod
    def check_services(cls, v: list[str]) -> list[str]:
        _raise_if_invalid(validate_selection(v, "service"))
        return v

    @field_validator("event_types")
    @classmethod
    def check_event_types(cls, v: list[str]) -> list[str]:
        _raise_if_invalid(validate_selection(v, "event type"))
        return v

    @field_validator("regions")
    @classmethod
    def check_regions(cls, v: list[str]) -> list[str]:
        _raise_if_invalid(validate_selection(v, "region"))
        return v

    @field_validator("severities")
    @classmethod
    def check_severities(cls, v: list[str]) -> list[str]:
        _raise_if_invalid(validate_selection(v, "severity level"))
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> Any:
        """Accept a plain {key: value} mapping as well as a list of rows."""
        if isinstance(v, dict):
            return [{"key": key, "value": value} for key, value in v.items()]
        return v

    @model_validator(mode="after")
    def check_action_group(self) -> "AlertTemplateRequest":
        """Require the action group fields of the selected action mode."""
        if self.action_mode == ActionMode.QUICK:
            _raise_if_invalid(validate_required(self.quick_action_group_name, "Action Group Name"))
            _raise_if_invalid(validate_email(self.quick_email))
        elif not self.existing_action_group_id:
            if not self.action_group_name or not self.action_group_resource_group:
                raise ValueError(
                    "Please provide both Action Group Name and Resource Group "
                    "(or choose Quick action)."
                )
        return self

    def to_input(self) -> AlertTemplateInput:
        """Convert to the immutable record consumed by the compiler."""
        return AlertTemplateInput(
            subscription_id=self.subscription_id,
            alert_name=self.alert_name,
            services=tuple(self.services),
            event_types=tuple(self.event_types),
            regions=tuple(self.regions),
            severities=tuple(self.severities),
            action_mode=self.action_mode,
            action_group_name=self.action_group_name,
            action_group_resource_group=self.action_group_resource_group,
            existing_action_group_id=self.existing_action_group_id,
            quick_action_group_name=self.quick_action_group_name,
            quick_email=self.quick_email,
            quick_short_name=self.quick_short_name,
            tags=tuple((row.key, row.value) for row in self.tags),
        )


class AlertTemplateResponse(BaseModel):
    """Rendered Bicep template."""

    template: str = Field(..., description="Bicep source text")
    resources: list[str] = Field(..., description="Symbolic names of declared resources")
    condition_count: int = Field(..., description="Number of allOf conditions")
    short_name: str | None = Field(
        default=None, description="Derived action group short name (quick mode only)"
    )


class FieldValidationResponse(BaseModel):
    is_valid: bool
    message: str = ""


class FormValidationResponse(BaseModel):
    """Per-field validation results for the alert form."""

    is_valid: bool
    fields: dict[str, FieldValidationResponse]
