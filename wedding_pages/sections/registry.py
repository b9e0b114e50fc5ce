"""Static registry mapping section type tags to their renderers.

The registry is assembled once by :func:`default_registry` and never mutated
afterwards. Dispatch goes through :meth:`SectionRegistry.render`, which is the
single place that enforces the composition contract: an unknown tag or a
renderer failure produces empty markup and a log record, and never stops the
remaining sections of a page from rendering.
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import logging
import typing as typ
from types import MappingProxyType

from jinja2 import TemplateError
from markupsafe import Markup

from ..content.models import UnknownSection
from ..content.sections import SECTION_PARSERS
from ..templating import create_environment
from .labels import SECTION_DESCRIPTIONS, SECTION_LABELS
from .views import SectionCallbacks, build_view, section_anchor

if typ.TYPE_CHECKING:
    from jinja2 import Environment, Template

    from ..content.models import KnownSection, Section

logger = logging.getLogger(__name__)

Clock = typ.Callable[[], dt.datetime]


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


class SectionRenderer(typ.Protocol):
    """Uniform renderer contract: ``(content, callbacks, anchor) -> Markup``.

    ``shared`` carries page-wide values (site settings, audience segments)
    supplied by the composer for the current render only.
    """

    def __call__(
        self,
        content: KnownSection,
        callbacks: SectionCallbacks,
        anchor: str,
        *,
        shared: cabc.Mapping[str, typ.Any],
    ) -> Markup: ...


class TemplateSectionRenderer:
    """Render one section kind through its ``sections/<type>.jinja`` template."""

    def __init__(self, template: Template, *, clock: Clock = _utc_now) -> None:
        self.template = template
        self._clock = clock

    def __call__(
        self,
        content: KnownSection,
        callbacks: SectionCallbacks,
        anchor: str,
        *,
        shared: cabc.Mapping[str, typ.Any],
    ) -> Markup:
        context = build_view(content, callbacks, now=self._clock())
        html = self.template.render(
            **shared, section=content, anchor=anchor, callbacks=callbacks, **context
        )
        return Markup(html)


class SectionRegistry(cabc.Mapping[str, SectionRenderer]):
    """Read-only mapping from section type tag to renderer."""

    def __init__(self, renderers: cabc.Mapping[str, SectionRenderer]) -> None:
        self._renderers = MappingProxyType(dict(renderers))

    def __getitem__(self, key: str) -> SectionRenderer:
        return self._renderers[key]

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._renderers)

    def __len__(self) -> int:
        return len(self._renderers)

    def render(
        self,
        section: Section,
        callbacks: SectionCallbacks,
        index: int,
        *,
        shared: cabc.Mapping[str, typ.Any] | None = None,
    ) -> Markup:
        """Render ``section`` at position ``index`` of its page.

        Parameters
        ----------
        section : Section
            Typed section content, possibly the unknown-type arm.
        callbacks : SectionCallbacks
            Shared page-level actions passed to every renderer.
        index : int
            Zero-based position of the section, used for its default anchor.
        shared : Mapping[str, Any], optional
            Page-wide template values such as ``settings``; the environment
            defaults apply when omitted.

        Returns
        -------
        Markup
            Rendered HTML, or empty markup when the type is unknown or the
            renderer fails.
        """
        renderer = self._renderers.get(section.type)
        if renderer is None or isinstance(section, UnknownSection):
            logger.warning("Unknown section type: %s", section.type or "<missing>")
            return Markup("")
        anchor = section_anchor(section.section_id, index)
        try:
            return renderer(section, callbacks, anchor, shared=shared or {})
        except (TemplateError, TypeError, ValueError, AttributeError, KeyError):
            logger.exception(
                "Failed to render section %d of type %s", index, section.type
            )
            return Markup("")

    def render_all(
        self,
        sections: cabc.Iterable[Section],
        callbacks: SectionCallbacks,
        *,
        shared: cabc.Mapping[str, typ.Any] | None = None,
    ) -> list[Markup]:
        """Render ``sections`` in order, one entry per section."""
        return [
            self.render(section, callbacks, index, shared=shared)
            for index, section in enumerate(sections)
        ]

    def labels(self) -> dict[str, str]:
        """Return the friendly name of each registered type."""
        return {key: SECTION_LABELS.get(key, key) for key in self._renderers}

    def descriptions(self) -> dict[str, str]:
        """Return the editor hint of each registered type."""
        return {key: SECTION_DESCRIPTIONS.get(key, "") for key in self._renderers}


def default_registry(
    env: Environment | None = None, *, clock: Clock = _utc_now
) -> SectionRegistry:
    """Build the registry of every section kind shipped with the site."""
    env = env or create_environment()
    return SectionRegistry(
        {
            key: TemplateSectionRenderer(
                env.get_template(f"sections/{key}.jinja"), clock=clock
            )
            for key in SECTION_PARSERS
        }
    )


__all__ = [
    "Clock",
    "SectionRegistry",
    "SectionRenderer",
    "TemplateSectionRenderer",
    "default_registry",
]
