"""Inject page metadata into a parsed HTML document head.

:func:`emit_metadata` owns every tag it writes: each carries a
``data-page-meta`` marker and all marked tags are removed before new ones are
added. Emitting for page A and then page B therefore leaves exactly B's
title, description, social preview tags and structured data in the head.
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ

from bs4 import BeautifulSoup

if typ.TYPE_CHECKING:
    from .config import SiteIdentity
    from .content.models import PageDocument, SiteSettings

MANAGED_ATTR = "data-page-meta"
DEFAULT_SHARE_IMAGE = "/images/watercolor/seville-skyline.png"


@dc.dataclass(frozen=True, slots=True)
class PageMetadata:
    """Values written into the document head for one page."""

    title: str
    description: str = ""
    keywords: str | None = None
    image: str | None = None
    url: str | None = None
    structured_data: typ.Mapping[str, typ.Any] | None = None

    @classmethod
    def from_page(
        cls, page: PageDocument, site: SiteIdentity, settings: SiteSettings
    ) -> PageMetadata:
        """Derive head metadata from a page's SEO block and the site settings.

        The canonical URL is ``<base_url>/`` for the default page and
        ``<base_url>/<slug>`` otherwise.
        """
        path = "" if page.slug == site.default_slug else page.slug
        image = page.seo.share_image or DEFAULT_SHARE_IMAGE
        return cls(
            title=page.seo.meta_title or page.title,
            description=page.seo.meta_description,
            keywords=page.seo.keywords,
            image=image,
            url=f"{site.base_url}/{path}",
            structured_data=wedding_event(
                settings, description=page.seo.meta_description, image=image
            ),
        )


def wedding_event(
    settings: SiteSettings, *, description: str, image: str | None
) -> dict[str, typ.Any]:
    """Return a schema.org ``Event`` describing the wedding."""
    couple = f"{settings.bride_name} & {settings.groom_name}"
    locality, _, country = settings.location.partition(",")
    organizer: dict[str, typ.Any] = {"@type": "Person", "name": couple}
    if settings.contact_email:
        organizer["email"] = settings.contact_email
    data: dict[str, typ.Any] = {
        "@context": "https://schema.org",
        "@type": "Event",
        "name": f"Boda {couple}",
        "description": description,
        "eventStatus": "https://schema.org/EventScheduled",
        "eventAttendanceMode": "https://schema.org/OfflineEventAttendanceMode",
        "location": {
            "@type": "Place",
            "name": settings.venue_name or settings.location,
            "address": {
                "@type": "PostalAddress",
                "addressLocality": locality.strip(),
                "addressCountry": country.strip(),
            },
        },
        "organizer": organizer,
    }
    if settings.wedding_date:
        data["startDate"] = settings.wedding_date
    if image:
        data["image"] = image
    return data


def _meta_tags(meta: PageMetadata) -> list[tuple[str, str, str | None]]:
    tags = [
        ("name", "description", meta.description),
        ("name", "keywords", meta.keywords),
        ("property", "og:title", meta.title),
        ("property", "og:description", meta.description),
        ("property", "og:type", "website"),
        ("property", "og:image", meta.image),
        ("property", "og:url", meta.url),
        ("name", "twitter:card", "summary_large_image"),
        ("name", "twitter:title", meta.title),
        ("name", "twitter:description", meta.description),
        ("name", "twitter:image", meta.image),
    ]
    return [(attr, key, value) for attr, key, value in tags if value]


def emit_metadata(document: BeautifulSoup, meta: PageMetadata) -> BeautifulSoup:
    """Replace the managed head tags of ``document`` with values from ``meta``.

    Parameters
    ----------
    document : BeautifulSoup
        Parsed HTML document; a ``<head>`` is created when missing.
    meta : PageMetadata
        Values to emit.

    Returns
    -------
    BeautifulSoup
        The same document, mutated in place.
    """
    head = document.head
    if head is None:
        head = document.new_tag("head")
        if document.html is not None:
            document.html.insert(0, head)
        else:
            document.insert(0, head)

    for tag in head.find_all(attrs={MANAGED_ATTR: True}):
        tag.decompose()
    for title in head.find_all("title"):
        title.decompose()

    title = document.new_tag("title", attrs={MANAGED_ATTR: "title"})
    title.string = meta.title
    head.append(title)
    for attr, key, value in _meta_tags(meta):
        head.append(
            document.new_tag(
                "meta", attrs={attr: key, "content": value, MANAGED_ATTR: key}
            )
        )
    if meta.url:
        link_attrs = {"rel": "canonical", "href": meta.url, MANAGED_ATTR: "canonical"}
        head.append(document.new_tag("link", attrs=link_attrs))
    if meta.structured_data:
        script = document.new_tag(
            "script", attrs={"type": "application/ld+json", MANAGED_ATTR: "ld-json"}
        )
        payload = json.dumps(meta.structured_data, ensure_ascii=False)
        script.string = payload.replace("</", "<\\/")
        head.append(script)
    return document


__all__ = ["MANAGED_ATTR", "PageMetadata", "emit_metadata", "wedding_event"]
