"""
Pytest configuration and shared fixtures.

Provides:
- Test environment variables (set before the application is imported)
- AnyIO backend selection
- FastAPI TestClient
- Sample alert request payloads (API shape and compiler input records)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]

# Add project root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("OBSERVABILITY_STRUCTURED_LOGS", "false")

import pytest  # noqa: E402 (import after path setup)
from fastapi.testclient import TestClient  # noqa: E402 (import after path setup)

from alert_bicep.domain.enums import ActionMode  # noqa: E402 (import after env setup)
from alert_bicep.domain.models import AlertTemplateInput  # noqa: E402
from alert_bicep.main import create_app  # noqa: E402
from alert_bicep.services.option_loader import clear_option_cache  # noqa: E402

SUBSCRIPTION_ID = "11111111-2222-3333-4444-555555555555"


# Per AnyIO testing docs: https://anyio.readthedocs.io/en/stable/testing.html
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _fresh_option_cache():
    clear_option_cache()
    yield
    clear_option_cache()


@pytest.fixture
def client() -> TestClient:
    """TestClient for a freshly created application."""
    return TestClient(create_app())


@pytest.fixture
def quick_payload() -> dict[str, Any]:
    """Quick-mode request body using the form's camelCase field names."""
    return {
        "subscriptionId": SUBSCRIPTION_ID,
        "alertName": "storage-health",
        "services": ["Storage", "Virtual Machines"],
        "eventTypes": ["Incident"],
        "regions": ["West Europe"],
        "severities": ["Sev1"],
        "actionMode": "quick",
        "quickActionGroupName": "Ops Team",
        "quickEmail": "ops@example.com",
        "tags": [{"key": "env", "value": "prod"}],
    }


@pytest.fixture
def existing_payload() -> dict[str, Any]:
    """Existing-action-group request body using snake_case field names."""
    return {
        "subscription_id": SUBSCRIPTION_ID,
        "alert_name": "svc-health",
        "services": ["Storage"],
        "event_types": ["Incident"],
        "regions": ["Global"],
        "severities": ["Sev2"],
        "action_mode": "existing",
        "action_group_name": "ag-ops",
        "action_group_resource_group": "rg-mon",
    }


@pytest.fixture
def existing_input() -> AlertTemplateInput:
    """Compiler input record for an existing action group."""
    return AlertTemplateInput(
        subscription_id=SUBSCRIPTION_ID,
        alert_name="svc-health",
        services=("Storage",),
        event_types=("Incident",),
        action_mode=ActionMode.EXISTING,
        action_group_name="ag-ops",
        action_group_resource_group="rg-mon",
    )
