"""Load the CMS content directory into an immutable :class:`ContentStore`.

The content directory is enumerated once at startup (or build time). Every
``pages/*.json`` document is schema-checked through :func:`parse_page` and
keyed by its ``slug``; global chrome documents (``settings.json``,
``header.json``, ``footer.json``, ``audience-segments.json``) fall back to
defaults when absent so a fresh checkout still renders.
"""

from __future__ import annotations

import json
import logging
import typing as typ
from pathlib import Path
from types import MappingProxyType

from ..errors import ContentError
from .helpers import Payload, _flag, _mappings, _optional_text, _text
from .models import (
    AudienceSegment,
    ContentStore,
    FooterContent,
    HeaderContent,
    NavItem,
    PageDocument,
    QuickLink,
    SeoMeta,
    SiteSettings,
    UnknownSection,
)
from .sections import parse_section

logger = logging.getLogger(__name__)


def load_content_store(
    content_dir: Path, *, pages_dir: Path | None = None
) -> ContentStore:
    """Load every page document and the global chrome from ``content_dir``.

    Parameters
    ----------
    content_dir : Path
        Root of the CMS content tree.
    pages_dir : Path, optional
        Directory holding one JSON document per page. Defaults to
        ``content_dir / "pages"``.

    Returns
    -------
    ContentStore
        Read-only snapshot keyed by page slug.

    Raises
    ------
    ContentError
        If a page document is unreadable, lacks a slug, or repeats a slug
        already loaded from another file.
    """
    pages_root = pages_dir or content_dir / "pages"
    pages: dict[str, PageDocument] = {}
    sources: dict[str, Path] = {}
    for path in sorted(pages_root.glob("*.json")):
        page = parse_page(_read_json(path), source=path)
        if page.slug in pages:
            msg = (
                f"Duplicate page slug '{page.slug}' in {path} "
                f"(already defined by {sources[page.slug]})."
            )
            raise ContentError(msg)
        pages[page.slug] = page
        sources[page.slug] = path
        for section in page.sections:
            if isinstance(section, UnknownSection):
                logger.warning(
                    "Page '%s' references unknown section type: %s",
                    page.slug,
                    section.type or "<missing>",
                )

    return ContentStore(
        pages=MappingProxyType(pages),
        settings=_build_settings(_read_optional(content_dir / "settings.json")),
        header=_build_header(_read_optional(content_dir / "header.json")),
        footer=_build_footer(_read_optional(content_dir / "footer.json")),
        audience_segments=_build_segments(
            _read_optional(content_dir / "audience-segments.json")
        ),
    )


def parse_page(payload: Payload, *, source: Path | str = "<memory>") -> PageDocument:
    """Build a :class:`PageDocument` from one authored JSON object.

    Raises
    ------
    ContentError
        If the document has no ``slug``.
    """
    slug = _text(payload, "slug")
    if not slug:
        msg = f"Page document {source} is missing a 'slug'."
        raise ContentError(msg)
    title = _text(payload, "title", slug.replace("-", " ").title())
    seo_raw = payload.get("seo")
    seo_payload: Payload = seo_raw if isinstance(seo_raw, dict) else {}
    seo = SeoMeta(
        meta_title=_text(seo_payload, "metaTitle", title),
        meta_description=_text(seo_payload, "metaDescription"),
        keywords=_optional_text(seo_payload, "keywords"),
        share_image=_optional_text(seo_payload, "shareImage"),
    )
    sections = tuple(parse_section(record) for record in _mappings(payload, "sections"))
    return PageDocument(slug=slug, title=title, seo=seo, sections=sections)


def _read_json(path: Path) -> Payload:
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"Unable to read content document {path}: {exc}"
        raise ContentError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"Content document {path} must contain a JSON object."
        raise ContentError(msg)
    return loaded


def _read_optional(path: Path) -> Payload:
    if not path.exists():
        return {}
    return _read_json(path)


def _build_settings(payload: Payload) -> SiteSettings:
    base = SiteSettings()
    return SiteSettings(
        site_name=_text(payload, "siteName", base.site_name),
        contact_email=_optional_text(payload, "contactEmail"),
        location=_text(payload, "location", base.location),
        social_proof_count=_text(payload, "socialProofCount", base.social_proof_count),
        bride_name=_text(payload, "brideName", base.bride_name),
        groom_name=_text(payload, "groomName", base.groom_name),
        wedding_date=_optional_text(payload, "weddingDate"),
        venue_name=_optional_text(payload, "venueName"),
    )


def _build_header(payload: Payload) -> HeaderContent:
    base = HeaderContent()
    nav_items = tuple(
        NavItem(
            label=_text(item, "label"),
            href=_text(item, "href", "#"),
            is_modal=_flag(item, "isModal", default=False),
        )
        for item in _mappings(payload, "navItems")
        if _text(item, "label")
    )
    return HeaderContent(
        brand_text=_text(payload, "brandText", base.brand_text),
        nav_items=nav_items,
        cta_button_text=_text(payload, "ctaButtonText", base.cta_button_text),
    )


def _build_footer(payload: Payload) -> FooterContent:
    quick_links = tuple(
        QuickLink(label=_text(item, "label"), href=_text(item, "href", "#"))
        for item in _mappings(payload, "quickLinks")
        if _text(item, "label")
    )
    return FooterContent(
        copyright=_text(payload, "copyright"),
        newsletter_title=_text(payload, "newsletterTitle"),
        newsletter_description=_text(payload, "newsletterDescription"),
        newsletter_button_text=_text(payload, "newsletterButtonText"),
        quick_links=quick_links,
    )


def _build_segments(payload: Payload) -> tuple[AudienceSegment, ...]:
    entries: typ.Iterable[Payload] = _mappings(payload, "segments")
    return tuple(
        AudienceSegment(value=_text(item, "value"), label=_text(item, "label"))
        for item in entries
        if _text(item, "value") and _text(item, "label")
    )


__all__ = ["load_content_store", "parse_page"]
