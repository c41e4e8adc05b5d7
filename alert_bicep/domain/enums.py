"""
Domain enums for Service Health alert templates.

Field paths and resource types are part of the generated template contract:
deployments of the rendered Bicep depend on these exact strings.
"""

from enum import Enum


class ActionMode(str, Enum):
    """How the alert notifies: reference an existing action group or declare one inline."""

    EXISTING = "existing"
    QUICK = "quick"


class ConditionField(str, Enum):
    """Activity log field paths used in Service Health alert conditions."""

    CATEGORY = "category"
    SERVICE_NAME = "properties.impactedServices[*].ServiceName"
    INCIDENT_TYPE = "properties.incidentType"
    REGION_NAME = "properties.impactedServices[*].ImpactedRegions[*].RegionName"


class ResourceName(str, Enum):
    """Symbolic resource names declared in the generated template."""

    ALERT = "serviceHealthAlert"
    QUICK_ACTION_GROUP = "quickAG"


class OptionKind(str, Enum):
    """Selection lists served to the form, keyed by their data file name."""

    SERVICES = "services"
    EVENT_TYPES = "eventTypes"
    REGIONS = "regions"
    SEVERITY = "severity"
