"""
Normalization of role permission blocks.

Bicep role definitions expect every entry of a `permissions` array to carry
all four action lists. This pass fills in the missing ones so any document
that embeds permissions renders with a complete shape.
"""

from typing import Any

PERMISSION_ACTION_KEYS = ("actions", "notActions", "dataActions", "notDataActions")


def ensure_permissions_actions(document: Any) -> Any:
    """
    Add empty action lists to every permission entry in a document.

    Walks lists and mappings at any depth. Wherever a mapping holds a
    list-valued `permissions` key, each mapping element of that list gains
    `actions`, `notActions`, `dataActions` and `notDataActions` (as empty
    lists) when absent. Existing keys are never overwritten and non-mapping
    elements are left alone.

    The document is updated in place and returned, so the call is safe to
    repeat.

    Args:
        document: Value graph to normalize (typically the alert properties)

    Returns:
        The same document object

    Example:
        >>> doc = {"permissions": [{"roleDefinitionId": "x"}]}
        >>> ensure_permissions_actions(doc)["permissions"][0]["notDataActions"]
        []
    """
    if isinstance(document, list):
        for item in document:
            ensure_permissions_actions(item)
        return document

    if isinstance(document, dict):
        permissions = document.get("permissions")
        if isinstance(permissions, list):
            for entry in permissions:
                if isinstance(entry, dict):
                    for key in PERMISSION_ACTION_KEYS:
                        entry.setdefault(key, [])
        for value in document.values():
            ensure_permissions_actions(value)

    return document
