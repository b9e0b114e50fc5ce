"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _section(raw: typ.Mapping[str, typ.Any], key: str) -> dict[str, typ.Any]:
    """Return the mapping stored under ``key`` or an empty dict."""
    match raw.get(key):
        case None:
            return {}
        case dict() as block:
            return block
        case _:
            msg = f"Site configuration '{key}' block must be a mapping."
            raise SiteConfigError(msg)


def _normalize_base_url(value: object | None, default: str) -> str:
    """Return an absolute base URL without a trailing slash."""
    text = _optional_str(value) or default
    if not text.startswith(("http://", "https://")):
        msg = f"Site 'base_url' must be an absolute http(s) URL, got '{text}'."
        raise SiteConfigError(msg)
    return text.rstrip("/")


def _normalize_target(value: object | None, default: str) -> str:
    """Return an in-page anchor target, prefixing ``#`` when missing."""
    text = _optional_str(value) or default
    return text if text.startswith("#") else f"#{text}"


def _resolve_path(value: object | None, default: Path, *, base: Path) -> Path:
    """Resolve ``value`` relative to ``base`` unless it is already absolute."""
    text = _optional_str(value)
    path = Path(text) if text else default
    if path.is_absolute():
        return path
    return base / path


__all__ = [
    "_normalize_base_url",
    "_normalize_target",
    "_optional_str",
    "_resolve_path",
    "_section",
]
