"""Tests for the ``pages`` CLI commands and the editor config generator."""

from __future__ import annotations

import json
import typing as typ
from textwrap import dedent

import pytest
from ruamel.yaml import YAML

from wedding_pages import cli
from wedding_pages.cms_config import CmsConfigError
from wedding_pages.content import SECTION_PARSERS

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Create a site.yaml with one page document beneath ``tmp_path``."""
    pages = tmp_path / "content" / "pages"
    pages.mkdir(parents=True)
    (pages / "home.json").write_text(
        json.dumps(
            {
                "slug": "home",
                "title": "Inicio",
                "sections": [{"type": "faq", "title": "Preguntas"}, {"type": "slider"}],
            }
        ),
        encoding="utf-8",
    )
    (pages / "viaje.json").write_text(
        json.dumps({"slug": "viaje", "sections": []}), encoding="utf-8"
    )
    (tmp_path / "site.yaml").write_text(
        dedent(
            f"""
            root: {tmp_path}
            cms:
              backend_repo: owner/site
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    return tmp_path


def test_build_writes_pages_and_reports_paths(
    site_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.build(config=site_root / "site.yaml", output_dir=site_root / "dist")

    out = capsys.readouterr().out
    assert (site_root / "dist" / "index.html").exists()
    assert (site_root / "dist" / "viaje" / "index.html").exists()
    assert (site_root / "dist" / "404.html").exists()
    assert out.count("wrote ") == 3


def test_check_lists_unknown_sections(
    site_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.check(config=site_root / "site.yaml")

    out = capsys.readouterr().out
    assert "home: section 1 has unknown type 'slider'" in out
    assert "2 page(s) checked" in out


def test_check_strict_fails_on_unknown_sections(site_root: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.check(config=site_root / "site.yaml", strict=True)
    assert excinfo.value.code == 1


def test_cms_config_lists_every_section_type(site_root: Path) -> None:
    output = site_root / "admin" / "config.yml"
    cli.cms_config(config=site_root / "site.yaml", output=output)

    data = YAML(typ="safe").load(output.read_text(encoding="utf-8"))
    assert data["backend"]["name"] == "github"
    assert data["backend"]["repo"] == "owner/site"
    assert data["backend"]["auth_endpoint"] == "auth-callback"
    pages = next(item for item in data["collections"] if item["name"] == "pages")
    sections = next(field for field in pages["fields"] if field["name"] == "sections")
    types = {entry["name"]: entry for entry in sections["types"]}
    assert set(types) == set(SECTION_PARSERS)
    resource_fields = {field["name"] for field in types["guest-resources"]["fields"]}
    assert "sections" in resource_fields, "resource groups keep their authored key"
    event_fields = next(
        field for field in types["events-calendar"]["fields"] if field["name"] == "events"
    )
    assert "requiresRSVP" in {field["name"] for field in event_fields["fields"]}


def test_cms_config_preserves_other_collections(site_root: Path) -> None:
    output = site_root / "config.yml"
    output.write_text(
        dedent(
            """
            # hand-written settings
            locale: es
            collections:
              - name: settings
                label: Ajustes
                files: []
              - name: pages
                label: Old
            """
        ).lstrip(),
        encoding="utf-8",
    )

    cli.cms_config(config=site_root / "site.yaml", output=output)

    text = output.read_text(encoding="utf-8")
    assert "# hand-written settings" in text
    data = YAML(typ="safe").load(text)
    assert data["locale"] == "es"
    assert [item["name"] for item in data["collections"]] == ["settings", "pages"]
    assert data["collections"][1]["label"] == "Pages"


def test_cms_config_rejects_non_mapping_file(site_root: Path) -> None:
    output = site_root / "config.yml"
    output.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(CmsConfigError):
        cli.cms_config(config=site_root / "site.yaml", output=output)
