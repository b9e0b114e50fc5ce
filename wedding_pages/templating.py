"""Shared Jinja environment and markdown rendering for page templates."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markdown import Markdown
from markupsafe import Markup

from .content.models import SiteSettings

TEMPLATES_DIR = Path(__file__).parent / "templates"
MARKDOWN_EXTENSIONS = ("tables", "sane_lists", "nl2br")


class MarkdownRenderer:
    """Render CMS markdown fields into HTML fragments."""

    def __init__(self, extensions: tuple[str, ...] = MARKDOWN_EXTENSIONS) -> None:
        self._extensions = list(extensions)

    def __call__(self, text: str | None) -> Markup:
        """Render ``text`` as markdown, returning empty markup for blank input.

        Raw HTML authored inside the markdown is escaped: content comes from
        browser editors and is not trusted to carry markup of its own.
        """
        if not text or not text.strip():
            return Markup("")
        md = Markdown(extensions=self._extensions)
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        return Markup(md.convert(text))


def create_environment(templates_dir: Path | None = None) -> Environment:
    """Return the Jinja environment used by section and page templates.

    Parameters
    ----------
    templates_dir : Path, optional
        Directory containing ``page.jinja`` and the ``sections/`` templates.
        Defaults to the templates shipped inside the package.
    """
    env = Environment(
        loader=FileSystemLoader(templates_dir or TEMPLATES_DIR),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["markdown"] = MarkdownRenderer()
    env.globals.update(settings=SiteSettings(), audience_segments=())
    return env


__all__ = ["TEMPLATES_DIR", "MarkdownRenderer", "create_environment"]
