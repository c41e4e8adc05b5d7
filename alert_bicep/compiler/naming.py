"""Name helpers: action group short names and tag keys."""

import re
import unicodedata

SHORT_NAME_FALLBACK = "ag"
SHORT_NAME_MAX_LENGTH = 12

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_TAG_KEY_INVALID = re.compile(r"[^A-Za-z0-9_.-]")


def make_short_name(name: str | None) -> str:
    """
    Derive an action group short name from a display name.

    Diacritics are stripped, the result is lowercased and reduced to
    `[a-z0-9]`, prefixed with `ag` when it starts with a digit, and cut to
    12 characters. Never fails: empty input yields `"ag"`.

    Example:
        >>> make_short_name("Café Team!")
        'cafeteam'
        >>> make_short_name("123abc")
        'ag123abc'
    """
    if not name:
        return SHORT_NAME_FALLBACK

    decomposed = unicodedata.normalize("NFKD", str(name))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    short = _NON_ALNUM.sub("", stripped.lower())

    if not short:
        return SHORT_NAME_FALLBACK
    if short[0].isdigit():
        short = SHORT_NAME_FALLBACK + short
    return short[:SHORT_NAME_MAX_LENGTH] or SHORT_NAME_FALLBACK


def sanitize_tag_key(key: str | None) -> str:
    """
    Make a user-supplied tag key safe for the template.

    Characters outside `[A-Za-z0-9_.-]` become `-`, and keys starting with a
    digit get a `t-` prefix. Returns an empty string for blank keys; callers
    drop those tags.
    """
    if not key:
        return ""
    sanitized = _TAG_KEY_INVALID.sub("-", str(key).strip())
    if sanitized[:1].isdigit():
        sanitized = "t-" + sanitized
    return sanitized
