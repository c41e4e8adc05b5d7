"""
Option list loader.

Reads the selection lists offered by the alert form (services, event types,
regions, severities) from JSON data files. Each file holds an array of
`{"value": ..., "label": ...}` objects; entries missing either key are
skipped with a warning.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from alert_bicep.core.errors import NotFoundError, OptionDataError
from alert_bicep.domain.enums import OptionKind

logger = logging.getLogger(__name__)


def resolve_option_kind(kind: str) -> OptionKind:
    """
    Map a raw kind string to an OptionKind.

    Raises:
        NotFoundError: If the kind is not a known option list
    """
    try:
        return OptionKind(kind)
    except ValueError:
        raise NotFoundError(
            f"Unknown option list '{kind}'",
            details={"kind": kind, "available": [k.value for k in OptionKind]},
        )


def load_options(kind: OptionKind | str, data_dir: Path) -> list[dict[str, str]]:
    """
    Load one option list.

    Args:
        kind: Option list to load
        data_dir: Directory containing `<kind>.json` files

    Returns:
        List of {"value", "label"} dicts in file order

    Raises:
        NotFoundError: If the kind is unknown
        OptionDataError: If the file is missing, unreadable, or has no valid entries
    """
    option_kind = kind if isinstance(kind, OptionKind) else resolve_option_kind(kind)
    return [dict(option) for option in _load_options_cached(option_kind, Path(data_dir))]


@lru_cache(maxsize=32)
def _load_options_cached(kind: OptionKind, data_dir: Path) -> tuple[dict[str, str], ...]:
    path = data_dir / f"{kind.value}.json"

    if not path.is_file():
        raise OptionDataError(
            f"{path.name} not found. Make sure the data file exists.",
            details={"kind": kind.value},
        )

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise OptionDataError(
            f"Failed to load {path.name}: {exc}", details={"kind": kind.value}
        ) from exc

    if not isinstance(data, list) or not data:
        raise OptionDataError(
            f"No valid data in {path.name}. "
            "Expected array of objects with 'value' and 'label' properties.",
            details={"kind": kind.value},
        )

    options: list[dict[str, str]] = []
    for item in data:
        if not isinstance(item, dict) or not item.get("value") or not item.get("label"):
            logger.warning("Invalid data format in %s: %r", path.name, item)
            continue
        options.append({"value": str(item["value"]), "label": str(item["label"])})

    logger.info("Loaded %d %s options from %s", len(options), kind.value, path)
    return tuple(options)


def clear_option_cache() -> None:
    """Forget cached option lists (used after data files change and in tests)."""
    _load_options_cached.cache_clear()
