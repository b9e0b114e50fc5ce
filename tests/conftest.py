"""Shared fixtures for wedding_pages tests."""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path
from types import MappingProxyType

import pytest

from wedding_pages.composer import PageComposer
from wedding_pages.config import ContentPaths, SiteConfig
from wedding_pages.content import ContentStore, PageDocument, parse_page
from wedding_pages.sections import default_registry
from wedding_pages.templating import create_environment

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from wedding_pages.sections import SectionRegistry

FIXED_NOW = dt.datetime(2026, 10, 18, 12, 0, tzinfo=dt.UTC)


def _build_page(
    slug: str,
    sections: list[dict[str, typ.Any]],
    *,
    meta_title: str | None = None,
    meta_description: str = "",
) -> PageDocument:
    """Return a parsed page document for ``slug`` holding ``sections``."""
    return parse_page(
        {
            "slug": slug,
            "title": slug.title(),
            "seo": {
                "metaTitle": meta_title or f"{slug.title()} | Test",
                "metaDescription": meta_description,
            },
            "sections": sections,
        }
    )


@pytest.fixture
def fixed_now() -> dt.datetime:
    """Return the instant the frozen registry clock reports."""
    return FIXED_NOW


@pytest.fixture
def page_factory() -> typ.Callable[..., PageDocument]:
    """Return a helper building parsed page documents."""
    return _build_page


@pytest.fixture
def site_config(tmp_path: Path) -> SiteConfig:
    """Return a site config rooted in a per-test temporary directory."""
    content_root = tmp_path / "content"
    return SiteConfig(
        content=ContentPaths(root=content_root, pages=content_root / "pages"),
        output_dir=tmp_path / "public",
    )


@pytest.fixture
def env() -> Environment:
    """Return a fresh template environment."""
    return create_environment()


@pytest.fixture
def registry(env: Environment) -> SectionRegistry:
    """Return the default registry with a frozen clock."""
    return default_registry(env, clock=lambda: FIXED_NOW)


@pytest.fixture
def make_composer(
    site_config: SiteConfig, env: Environment, registry: SectionRegistry
) -> typ.Callable[..., PageComposer]:
    """Return a factory composing pages from in-memory documents."""

    def _make(*pages: PageDocument) -> PageComposer:
        store = ContentStore(pages=MappingProxyType({page.slug: page for page in pages}))
        return PageComposer(site_config, store, env=env, registry=registry)

    return _make
