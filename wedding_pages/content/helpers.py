"""Coercion helpers for externally authored content JSON.

Content is edited in the browser CMS and is never type-checked at rest, so
every accessor here returns a sensible default instead of raising when a
field is missing or has the wrong shape.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

Payload = typ.Mapping[str, typ.Any]


def _text(payload: Payload, key: str, default: str = "") -> str:
    """Return ``payload[key]`` as a stripped string, or ``default``."""
    value = payload.get(key)
    if value is None or isinstance(value, (dict, list)):
        return default
    text = str(value).strip()
    return text or default


def _optional_text(payload: Payload, key: str) -> str | None:
    """Return a stripped string value or None when empty or missing."""
    text = _text(payload, key)
    return text or None


def _flag(payload: Payload, key: str, *, default: bool) -> bool:
    """Return a boolean flag, accepting the string spellings the CMS emits."""
    match payload.get(key):
        case bool() as value:
            return value
        case str() as value if value.strip().lower() in {"true", "yes", "1"}:
            return True
        case str() as value if value.strip().lower() in {"false", "no", "0"}:
            return False
        case _:
            return default


def _choice(
    payload: Payload, key: str, allowed: cabc.Collection[str], *, default: str
) -> str:
    """Return an enum selection, falling back to ``default`` when unknown."""
    value = _text(payload, key)
    return value if value in allowed else default


def _optional_choice(
    payload: Payload, key: str, allowed: cabc.Collection[str]
) -> str | None:
    """Return an enum selection or None when missing or unknown."""
    value = _text(payload, key)
    return value if value in allowed else None


def _columns(payload: Payload, key: str = "columns", *, default: int = 4) -> int:
    """Return a grid column count restricted to 2, 3, or 4."""
    try:
        value = int(payload.get(key, default))
    except (TypeError, ValueError, OverflowError):
        return default
    return value if value in (2, 3, 4) else default


def _mappings(payload: Payload, key: str) -> list[Payload]:
    """Return the list of mapping entries under ``key``, skipping the rest."""
    match payload.get(key):
        case list() as items:
            return [item for item in items if isinstance(item, dict)]
        case _:
            return []


__all__ = [
    "Payload",
    "_choice",
    "_columns",
    "_flag",
    "_mappings",
    "_optional_choice",
    "_optional_text",
    "_text",
]
