"""Cyclopts CLI entrypoint for building and serving the wedding site.

The ``pages`` console script renders every CMS page document to static HTML,
validates authored content, regenerates the in-browser editor configuration,
and runs the request-time application locally. Typical usage involves running
``pages check`` and ``pages build`` in CI after an editor commit, and
``pages serve`` during development.

Examples
--------
Build the site for the default configuration:

>>> from wedding_pages.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory:

>>> from wedding_pages.cli import app
>>> app.run(["build", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import os
import typing as typ
from pathlib import Path

import cyclopts
import uvicorn
from cyclopts import App, Parameter

from .cms_config import write_cms_config
from .composer import SiteBuilder
from .config import load_site_config
from .content import SECTION_PARSERS, UnknownSection, load_content_store
from .sections import SECTION_DESCRIPTIONS, SECTION_LABELS

DEFAULT_CONFIG = Path("config/site.yaml")
DEFAULT_CMS_CONFIG = Path("public/admin/config.yml")

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render every page document to static HTML.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Render all pages plus ``404.html`` for the site configuration.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Override the configured output directory.

    Returns
    -------
    None
        Writes rendered documents and prints each written path.
    """
    site_config = load_site_config(config)
    for path in SiteBuilder(site_config, output_dir=output_dir).run():
        print(f"wrote {_format_path(path)}")


@app.command(help="Validate authored content and report unrenderable sections.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    strict: typ.Annotated[
        bool,
        Parameter(help="Fail when a page uses an unknown section type"),
    ] = False,
) -> None:
    """Load every content document and list sections nothing can render.

    Raises
    ------
    SystemExit
        With status ``1`` when ``strict`` is set and unknown sections exist.
    ContentError
        If a document is malformed or two pages share a slug.
    """
    site_config = load_site_config(config)
    store = load_content_store(
        site_config.content.root, pages_dir=site_config.content.pages
    )
    unknown = 0
    for slug, page in sorted(store.pages.items()):
        for index, section in enumerate(page.sections):
            if isinstance(section, UnknownSection):
                unknown += 1
                print(f"{slug}: section {index} has unknown type {section.type!r}")
    print(
        f"{len(store.pages)} page(s) checked against "
        f"{len(SECTION_PARSERS)} section types"
    )
    if unknown and strict:
        raise SystemExit(1)


@app.command(name="cms-config", help="Regenerate the in-browser editor config.")
def cms_config(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path,
        Parameter(help="Where to write config.yml", env_var="INPUT_CMS_OUTPUT"),
    ] = DEFAULT_CMS_CONFIG,
) -> None:
    """Write the editor collection and section types for the registry."""
    site_config = load_site_config(config)
    path = write_cms_config(
        site_config,
        output,
        labels=SECTION_LABELS,
        descriptions=SECTION_DESCRIPTIONS,
    )
    print(f"wrote {_format_path(path)}")


@app.command(help="Run the request-time application with uvicorn.")
def serve(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    host: typ.Annotated[str, Parameter(help="Bind address")] = "127.0.0.1",
    port: typ.Annotated[int, Parameter(help="Bind port")] = 8000,
) -> None:
    """Serve pages, forms and editor endpoints from the current checkout."""
    os.environ["PAGES_CONFIG"] = str(config)
    uvicorn.run(
        "wedding_pages.server:create_app",
        factory=True,
        host=host,
        port=port,
    )


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
