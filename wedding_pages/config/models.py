"""Typed dataclasses describing wedding site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import DEFAULT_SLUG


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteIdentity:
    """Public identity of the site used for canonical URLs and the lang tag."""

    name: str = "Valentina & Pedro Juan"
    base_url: str = "https://valenypedrito.com"
    language: str = "es"
    default_slug: str = DEFAULT_SLUG


@dc.dataclass(slots=True)
class ContentPaths:
    """Locations of the CMS-authored content documents."""

    root: Path = Path("content")
    pages: Path = Path("content/pages")


@dc.dataclass(slots=True)
class FormEndpoints:
    """Client-facing endpoints the rendered forms post to."""

    collector_url: str = "/"
    newsletter_base: str = "/api/newsletter"


@dc.dataclass(slots=True)
class CallbackTargets:
    """In-page targets for the cross-cutting section callbacks."""

    signup_target: str = "#rsvp"
    partnership_target: str = "#partnership"


@dc.dataclass(slots=True)
class CmsConfig:
    """Settings for the in-browser editor config generated by ``pages cms-config``."""

    backend_repo: str | None = None
    branch: str = "main"
    auth_endpoint: str = "auth-callback"
    base_url: str | None = None
    media_folder: str = "public/images/uploads"
    public_folder: str = "/images/uploads"


@dc.dataclass(slots=True)
class SiteConfig:
    """Aggregated site configuration sourced from ``config/site.yaml``."""

    site: SiteIdentity = dc.field(default_factory=SiteIdentity)
    content: ContentPaths = dc.field(default_factory=ContentPaths)
    output_dir: Path = Path("public")
    forms: FormEndpoints = dc.field(default_factory=FormEndpoints)
    callbacks: CallbackTargets = dc.field(default_factory=CallbackTargets)
    cms: CmsConfig = dc.field(default_factory=CmsConfig)


__all__ = [
    "CallbackTargets",
    "CmsConfig",
    "ContentPaths",
    "FormEndpoints",
    "SiteConfig",
    "SiteConfigError",
    "SiteIdentity",
]
