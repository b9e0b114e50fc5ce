"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _normalize_base_url,
    _normalize_target,
    _optional_str,
    _resolve_path,
    _section,
)
from .models import (
    CallbackTargets,
    CmsConfig,
    ContentPaths,
    FormEndpoints,
    SiteConfig,
    SiteIdentity,
)


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the wedding site.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site configuration file (for example,
        ``config/site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with content locations, output directory, form
        endpoints, callback targets, and CMS editor settings. Relative paths
        are resolved against the optional top-level ``root`` key (default: the
        current working directory).

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a block has the wrong shape or a value is invalid.

    Examples
    --------
    >>> from pathlib import Path
    >>> from wedding_pages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.site.default_slug  # doctest: +SKIP
    'home'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):  # pragma: no cover - config error guard
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base = Path(raw.get("root") or ".")

    return SiteConfig(
        site=_build_site_identity(_section(raw, "site")),
        content=_build_content_paths(_section(raw, "content"), base=base),
        output_dir=_resolve_path(
            _section(raw, "output").get("dir"), Path("public"), base=base
        ),
        forms=_build_form_endpoints(_section(raw, "forms")),
        callbacks=_build_callback_targets(_section(raw, "callbacks")),
        cms=_build_cms_config(_section(raw, "cms")),
    )


def _build_site_identity(payload: typ.Mapping[str, typ.Any]) -> SiteIdentity:
    base = SiteIdentity()
    return SiteIdentity(
        name=_optional_str(payload.get("name")) or base.name,
        base_url=_normalize_base_url(payload.get("base_url"), base.base_url),
        language=_optional_str(payload.get("language")) or base.language,
        default_slug=_optional_str(payload.get("default_slug")) or base.default_slug,
    )


def _build_content_paths(
    payload: typ.Mapping[str, typ.Any], *, base: Path
) -> ContentPaths:
    root = _resolve_path(payload.get("dir"), Path("content"), base=base)
    pages = _resolve_path(payload.get("pages_dir"), root / "pages", base=base)
    return ContentPaths(root=root, pages=pages)


def _build_form_endpoints(payload: typ.Mapping[str, typ.Any]) -> FormEndpoints:
    base = FormEndpoints()
    newsletter = _optional_str(payload.get("newsletter_base")) or base.newsletter_base
    return FormEndpoints(
        collector_url=_optional_str(payload.get("collector_url")) or base.collector_url,
        newsletter_base=newsletter.rstrip("/"),
    )


def _build_callback_targets(payload: typ.Mapping[str, typ.Any]) -> CallbackTargets:
    base = CallbackTargets()
    return CallbackTargets(
        signup_target=_normalize_target(
            payload.get("signup_target"), base.signup_target
        ),
        partnership_target=_normalize_target(
            payload.get("partnership_target"), base.partnership_target
        ),
    )


def _build_cms_config(payload: typ.Mapping[str, typ.Any]) -> CmsConfig:
    base = CmsConfig()
    return CmsConfig(
        backend_repo=_optional_str(payload.get("backend_repo")),
        branch=_optional_str(payload.get("branch")) or base.branch,
        auth_endpoint=_optional_str(payload.get("auth_endpoint"))
        or base.auth_endpoint,
        base_url=_optional_str(payload.get("base_url")),
        media_folder=_optional_str(payload.get("media_folder")) or base.media_folder,
        public_folder=_optional_str(payload.get("public_folder"))
        or base.public_folder,
    )


__all__ = ["load_site_config"]
