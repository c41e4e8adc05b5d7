"""
Unit tests for alert form validators.

Tests cover:
- Subscription ID format checks
- Alert name length and character rules
- Selection, required-field and email checks
- Whole-form validation per action mode
"""

import pytest

from alert_bicep.core.validators import (
    validate_alert_form,
    validate_alert_name,
    validate_email,
    validate_required,
    validate_selection,
    validate_subscription_id,
)

SUBSCRIPTION_ID = "11111111-2222-3333-4444-555555555555"


class TestValidateSubscriptionId:
    @pytest.mark.anyio
    async def test_valid_guid(self):
        assert validate_subscription_id(SUBSCRIPTION_ID).is_valid

    @pytest.mark.anyio
    async def test_uppercase_guid_accepted(self):
        assert validate_subscription_id("ABCDEF01-2222-3333-4444-555555555555").is_valid

    @pytest.mark.anyio
    async def test_surrounding_whitespace_ignored(self):
        assert validate_subscription_id(f"  {SUBSCRIPTION_ID} ").is_valid

    @pytest.mark.anyio
    async def test_empty(self):
        result = validate_subscription_id("")
        assert not result.is_valid
        assert result.message.startswith("Subscription ID is required.")

    @pytest.mark.anyio
    async def test_missing_hyphens(self):
        result = validate_subscription_id("11111111222233334444555555555555")
        assert not result.is_valid
        assert "missing hyphens" in result.message

    @pytest.mark.anyio
    async def test_bad_format(self):
        result = validate_subscription_id("1111-2222")
        assert not result.is_valid
        assert result.message.startswith("Invalid Subscription ID format.")


class TestValidateAlertName:
    @pytest.mark.anyio
    async def test_valid_name(self):
        assert validate_alert_name("storage-health").is_valid

    @pytest.mark.anyio
    async def test_required(self):
        result = validate_alert_name("   ")
        assert not result.is_valid
        assert result.message.startswith("Alert Name is required.")

    @pytest.mark.anyio
    async def test_too_short(self):
        result = validate_alert_name("ab")
        assert result.message == "Alert Name is too short (2 chars). Minimum 3 characters required."

    @pytest.mark.anyio
    async def test_boundaries(self):
        assert validate_alert_name("abc").is_valid
        assert validate_alert_name("a" * 260).is_valid
        assert not validate_alert_name("a" * 261).is_valid

    @pytest.mark.anyio
    async def test_invalid_characters_listed(self):
        result = validate_alert_name("alert<1>?")
        assert not result.is_valid
        assert "invalid characters: <, >, ?" in result.message


class TestFieldHelpers:
    @pytest.mark.anyio
    async def test_selection_ignores_placeholder(self):
        result = validate_selection([""], "event type")
        assert not result.is_valid
        assert result.message == (
            "Please select at least one event type. Use Ctrl/Cmd+Click to select multiple."
        )

    @pytest.mark.anyio
    async def test_selection_none(self):
        assert not validate_selection(None, "service").is_valid

    @pytest.mark.anyio
    async def test_selection_valid(self):
        assert validate_selection(["Incident"], "event type").is_valid

    @pytest.mark.anyio
    async def test_selection_must_be_a_list(self):
        result = validate_selection("Storage", "service")
        assert not result.is_valid
        assert result.message == "Expected a list of service selections."
        assert validate_selection(("Storage",), "service").is_valid

    @pytest.mark.anyio
    async def test_non_string_text(self):
        assert validate_required(5, "Name").message == "Name must be a text value."
        assert not validate_subscription_id(123).is_valid
        assert not validate_alert_name(["x"]).is_valid

    @pytest.mark.anyio
    async def test_required(self):
        assert validate_required("x", "Name").is_valid
        assert validate_required(" ", "Name").message == "Name is required."

    @pytest.mark.anyio
    async def test_email(self):
        assert validate_email("ops@example.com").is_valid
        assert validate_email("").message == "Email is required."
        assert validate_email("not-an-email").message == (
            "'not-an-email' is not a valid email address."
        )


class TestValidateAlertForm:
    @pytest.mark.anyio
    async def test_valid_existing_form(self, existing_payload):
        result = validate_alert_form(existing_payload)

        assert result.is_valid
        assert result.errors == {}
        assert "action_group_name" in result.fields

    @pytest.mark.anyio
    async def test_reports_every_invalid_field(self):
        result = validate_alert_form({"action_mode": "existing"})

        assert not result.is_valid
        assert set(result.errors) == {
            "subscription_id",
            "alert_name",
            "services",
            "event_types",
            "regions",
            "severities",
            "action_group_name",
            "action_group_resource_group",
        }

    @pytest.mark.anyio
    async def test_quick_mode_checks_quick_fields(self, existing_payload):
        payload = {**existing_payload, "action_mode": "quick", "quick_email": "bad"}
        result = validate_alert_form(payload)

        assert set(result.errors) == {"quick_action_group_name", "quick_email"}
        assert "action_group_name" not in result.fields

    @pytest.mark.anyio
    async def test_explicit_group_id_skips_name_checks(self, existing_payload):
        payload = {
            **existing_payload,
            "action_group_name": "",
            "action_group_resource_group": "",
            "existing_action_group_id": "/subscriptions/x/resourceGroups/y",
        }
        result = validate_alert_form(payload)

        assert result.is_valid
        assert "action_group_name" not in result.fields

    @pytest.mark.anyio
    async def test_to_dict_shape(self, existing_payload):
        data = validate_alert_form({**existing_payload, "alert_name": "ab"}).to_dict()

        assert data["is_valid"] is False
        assert data["fields"]["alert_name"]["is_valid"] is False
        assert data["fields"]["subscription_id"] == {"is_valid": True, "message": ""}
