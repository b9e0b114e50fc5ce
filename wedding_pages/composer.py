"""Compose full HTML pages from page documents and write the static site.

``PageComposer`` renders a page's sections in authored order through the
section registry, wraps them with the global header and footer, and finally
emits head metadata onto the parsed document. ``SiteBuilder`` drives the
composer over every loaded document and writes the results beneath the
configured output directory, mirroring the way the request-time app serves
the same pages.

Typical usage mirrors the build pipeline:

>>> from pathlib import Path
>>> from wedding_pages.config import load_site_config
>>> builder = SiteBuilder(load_site_config(Path("config/site.yaml")))  # doctest: +SKIP
>>> paths = builder.run()  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from bs4 import BeautifulSoup

from ._constants import (
    EMAIL_PATTERN,
    INLINE_DWELL_SECONDS,
    MODAL_DWELL_SECONDS,
    NOT_FOUND_OUTPUT,
    PAGE_OUTPUT_TEMPLATE,
    PARTNERSHIP_TYPES,
)
from .content import load_content_store
from .forms.validation import CLIENT_RULES
from .metadata import PageMetadata, emit_metadata
from .resolver import PageResolver
from .sections import SectionCallbacks, default_registry
from .templating import create_environment

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from .config import SiteConfig
    from .content import ContentStore, PageDocument
    from .sections import SectionRegistry

NOT_FOUND_TITLE = "Página no encontrada"


@dc.dataclass(frozen=True, slots=True)
class HeaderState:
    """Navigation state owned by the header render alone."""

    scrolled: bool = False
    menu_open: bool = False


def callbacks_for(config: SiteConfig) -> SectionCallbacks:
    """Return the section callbacks configured for the site."""
    return SectionCallbacks(
        signup_target=config.callbacks.signup_target,
        partnership_target=config.callbacks.partnership_target,
        collector_url=config.forms.collector_url,
        newsletter_base=config.forms.newsletter_base,
    )


class PageComposer:
    """Render page documents into complete HTML documents."""

    def __init__(
        self,
        config: SiteConfig,
        store: ContentStore,
        *,
        env: Environment | None = None,
        registry: SectionRegistry | None = None,
    ) -> None:
        """Bind the composer to a site configuration and content snapshot.

        Parameters
        ----------
        config : SiteConfig
            Parsed ``site.yaml``; supplies the site identity, callback
            targets and form endpoints.
        store : ContentStore
            Loaded content documents and global chrome.
        env : Environment, optional
            Jinja environment holding ``page.jinja`` and section templates.
            Defaults to :func:`create_environment`.
        registry : SectionRegistry, optional
            Section renderers. Defaults to :func:`default_registry` over
            ``env``.
        """
        self.config = config
        self.store = store
        self.env = env or create_environment()
        self.registry = registry or default_registry(self.env)
        self.callbacks = callbacks_for(config)
        self.page_template = self.env.get_template("page.jinja")
        self.not_found_template = self.env.get_template("not_found.jinja")

    def _shared(self) -> dict[str, typ.Any]:
        return {
            "settings": self.store.settings,
            "audience_segments": self.store.audience_segments,
        }

    def _chrome(self, header_state: HeaderState) -> dict[str, typ.Any]:
        return {
            **self._shared(),
            "site": self.config.site,
            "header": self.store.header,
            "header_state": header_state,
            "footer": self.store.footer,
            "callbacks": self.callbacks,
            "partnership_types": PARTNERSHIP_TYPES,
            "modal_dwell_ms": int(MODAL_DWELL_SECONDS * 1000),
            "inline_dwell_ms": int(INLINE_DWELL_SECONDS * 1000),
            "email_pattern": EMAIL_PATTERN,
            "form_rules": CLIENT_RULES,
        }

    def _finish(self, html: str, meta: PageMetadata) -> str:
        soup = BeautifulSoup(html, "html.parser")
        emit_metadata(soup, meta)
        output = str(soup)
        if not output.endswith("\n"):
            output += "\n"
        return output

    def compose(
        self, page: PageDocument, *, header_state: HeaderState | None = None
    ) -> str:
        """Return the full HTML document for ``page``.

        Sections render in authored order; unknown or failing sections
        contribute nothing. A page without sections renders the header, an
        empty main element and the footer.
        """
        sections = self.registry.render_all(
            page.sections, self.callbacks, shared=self._shared()
        )
        html = self.page_template.render(
            page_slug=page.slug,
            sections=sections,
            **self._chrome(header_state or HeaderState()),
        )
        meta = PageMetadata.from_page(page, self.config.site, self.store.settings)
        return self._finish(html, meta)

    def compose_not_found(self, path: str | None = None) -> str:
        """Return the dedicated not-found document, naming ``path`` if given."""
        html = self.not_found_template.render(
            requested_path=path, **self._chrome(HeaderState())
        )
        meta = PageMetadata(
            title=f"{NOT_FOUND_TITLE} | {self.config.site.name}",
            description=NOT_FOUND_TITLE,
        )
        return self._finish(html, meta)


class SiteBuilder:
    """Write every page document plus the not-found page as static HTML."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        store: ContentStore | None = None,
        composer: PageComposer | None = None,
        output_dir: Path | None = None,
    ) -> None:
        self.config = config
        self.store = store or load_content_store(
            config.content.root, pages_dir=config.content.pages
        )
        self.composer = composer or PageComposer(config, self.store)
        self.resolver = PageResolver(self.store.pages, config.site.default_slug)
        self.output_dir = output_dir or config.output_dir

    def _output_path(self, slug: str) -> Path:
        if slug == self.resolver.default_slug:
            return self.output_dir / "index.html"
        return self.output_dir / PAGE_OUTPUT_TEMPLATE.format(slug=slug)

    def run(self) -> list[Path]:
        """Render and write every page, returning the written paths.

        Returns
        -------
        list[Path]
            One path per page in load order (``index.html`` for the default
            slug, ``<slug>/index.html`` otherwise) followed by ``404.html``.

        Notes
        -----
        Parent directories are created as needed and files are written as
        UTF-8. Filesystem errors propagate to the caller.
        """
        written: list[Path] = []
        for slug in self.resolver.slugs():
            path = self._output_path(slug)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                self.composer.compose(self.resolver.resolve(slug)), encoding="utf-8"
            )
            written.append(path)
        not_found = self.output_dir / NOT_FOUND_OUTPUT
        not_found.parent.mkdir(parents=True, exist_ok=True)
        not_found.write_text(self.composer.compose_not_found(), encoding="utf-8")
        written.append(not_found)
        return written


__all__ = ["HeaderState", "PageComposer", "SiteBuilder", "callbacks_for"]
