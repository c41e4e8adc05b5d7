"""
Tests for permission normalization and name helpers.

Tests cover:
- ensure_permissions_actions (defaults, no overwrite, deep recursion, idempotence)
- make_short_name
- sanitize_tag_key
"""

import copy

import pytest

from alert_bicep.compiler.naming import make_short_name, sanitize_tag_key
from alert_bicep.compiler.permissions import ensure_permissions_actions

EMPTY_ACTIONS = {"actions": [], "notActions": [], "dataActions": [], "notDataActions": []}


class TestEnsurePermissionsActions:
    @pytest.mark.anyio
    async def test_adds_all_action_lists(self):
        result = ensure_permissions_actions({"permissions": [{"roleDefinitionId": "x"}]})

        assert result["permissions"][0] == {"roleDefinitionId": "x", **EMPTY_ACTIONS}

    @pytest.mark.anyio
    async def test_does_not_overwrite_existing_keys(self):
        doc = {"permissions": [{"actions": ["Microsoft.Insights/read"]}]}
        ensure_permissions_actions(doc)

        entry = doc["permissions"][0]
        assert entry["actions"] == ["Microsoft.Insights/read"]
        assert entry["notActions"] == []
        assert entry["dataActions"] == []
        assert entry["notDataActions"] == []

    @pytest.mark.anyio
    async def test_skips_non_mapping_entries(self):
        doc = {"permissions": ["read", 3, {"a": 1}]}
        ensure_permissions_actions(doc)

        assert doc["permissions"][0] == "read"
        assert doc["permissions"][1] == 3
        assert doc["permissions"][2] == {"a": 1, **EMPTY_ACTIONS}

    @pytest.mark.anyio
    async def test_recurses_into_nested_structures(self):
        doc = {
            "resources": [
                {"properties": {"permissions": [{}]}},
                [{"permissions": [{"id": 1}]}],
            ]
        }
        ensure_permissions_actions(doc)

        assert doc["resources"][0]["properties"]["permissions"][0] == EMPTY_ACTIONS
        assert doc["resources"][1][0]["permissions"][0] == {"id": 1, **EMPTY_ACTIONS}

    @pytest.mark.anyio
    async def test_recurses_inside_permission_entries(self):
        doc = {"permissions": [{"inner": {"permissions": [{}]}}]}
        ensure_permissions_actions(doc)

        assert doc["permissions"][0]["inner"]["permissions"][0] == EMPTY_ACTIONS

    @pytest.mark.anyio
    async def test_non_list_permissions_untouched(self):
        doc = {"permissions": {"role": "reader"}}
        assert ensure_permissions_actions(copy.deepcopy(doc)) == doc

    @pytest.mark.anyio
    async def test_returns_same_object(self):
        doc = {"enabled": True}
        assert ensure_permissions_actions(doc) is doc

    @pytest.mark.anyio
    async def test_idempotent(self):
        doc = {"permissions": [{"roleDefinitionId": "x"}]}
        once = copy.deepcopy(ensure_permissions_actions(doc))
        twice = ensure_permissions_actions(doc)
        assert once == twice

    @pytest.mark.anyio
    async def test_scalars_pass_through(self):
        assert ensure_permissions_actions("text") == "text"
        assert ensure_permissions_actions(5) == 5


class TestMakeShortName:
    @pytest.mark.anyio
    async def test_strips_diacritics_and_symbols(self):
        assert make_short_name("Café Team!") == "cafeteam"

    @pytest.mark.anyio
    async def test_empty_defaults_to_ag(self):
        assert make_short_name("") == "ag"

    @pytest.mark.anyio
    async def test_none_defaults_to_ag(self):
        assert make_short_name(None) == "ag"

    @pytest.mark.anyio
    async def test_only_symbols_defaults_to_ag(self):
        assert make_short_name("!!! ---") == "ag"

    @pytest.mark.anyio
    async def test_leading_digit_gets_prefix(self):
        assert make_short_name("123abc") == "ag123abc"[:12]

    @pytest.mark.anyio
    async def test_prefix_counts_towards_length(self):
        assert make_short_name("1234567890123") == "ag1234567890"

    @pytest.mark.anyio
    async def test_truncates_to_twelve_characters(self):
        result = make_short_name("A" * 20)
        assert result == "a" * 12
        assert len(result) == 12

    @pytest.mark.anyio
    async def test_accented_uppercase(self):
        assert make_short_name("ÉQUIPE Ops") == "equipeops"

    @pytest.mark.anyio
    async def test_deterministic(self):
        assert make_short_name("Ops Team") == make_short_name("Ops Team") == "opsteam"


class TestSanitizeTagKey:
    @pytest.mark.anyio
    async def test_valid_key_unchanged(self):
        assert sanitize_tag_key("cost.center_id-1") == "cost.center_id-1"

    @pytest.mark.anyio
    async def test_invalid_characters_replaced(self):
        assert sanitize_tag_key("cost center") == "cost-center"
        assert sanitize_tag_key("env:prod") == "env-prod"

    @pytest.mark.anyio
    async def test_whitespace_trimmed(self):
        assert sanitize_tag_key("  owner  ") == "owner"

    @pytest.mark.anyio
    async def test_leading_digit_prefixed(self):
        assert sanitize_tag_key("1env") == "t-1env"

    @pytest.mark.anyio
    async def test_blank_keys(self):
        assert sanitize_tag_key("") == ""
        assert sanitize_tag_key(None) == ""
        assert sanitize_tag_key("   ") == ""
