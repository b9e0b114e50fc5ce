"""Generate the in-browser editor's ``config.yml`` from the section registry.

The editor needs one ``types`` entry per section kind so authors can only add
sections the site can render. Field lists are derived from the section
dataclasses, mapped back to the camelCase keys the content loader reads.
When the output file already exists it is updated in place with a
round-trip YAML dumper so hand-written comments and extra collections
survive regeneration.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
import types

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from .content.models import KnownSection

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig


class CmsConfigError(ValueError):
    """Raised when an existing editor config cannot be updated."""


KEY_OVERRIDES = {"groups": "sections", "requires_rsvp": "requiresRSVP"}
IMAGE_FIELDS = frozenset(
    {
        "image",
        "background_desktop",
        "background_mobile",
        "background_image",
        "store_image",
    }
)
MARKDOWN_FIELDS = frozenset(
    {
        "body",
        "content",
        "answer",
        "message",
        "cash_message",
        "parking_info",
        "transport_info",
    }
)


def _camel(name: str) -> str:
    if name in KEY_OVERRIDES:
        return KEY_OVERRIDES[name]
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _label(name: str) -> str:
    return name.replace("_", " ").capitalize()


def _element_type(hint: typ.Any) -> type | None:
    """Return ``X`` for ``tuple[X, ...]`` hints, else None."""
    if typ.get_origin(hint) is tuple:
        args = typ.get_args(hint)
        if args and dc.is_dataclass(args[0]):
            return args[0]
    return None


def _is_optional(hint: typ.Any) -> bool:
    return typ.get_origin(hint) in (typ.Union, types.UnionType) and type(
        None
    ) in typ.get_args(hint)


def _widget(name: str, hint: typ.Any) -> CommentedMap:
    field = CommentedMap(label=_label(name), name=_camel(name))
    element = _element_type(hint)
    if element is not None:
        field["widget"] = "list"
        field["fields"] = _dataclass_fields(element)
    elif hint is bool:
        field["widget"] = "boolean"
    elif hint is int:
        field["widget"] = "number"
        field["value_type"] = "int"
    elif name in IMAGE_FIELDS:
        field["widget"] = "image"
    elif name in MARKDOWN_FIELDS:
        field["widget"] = "markdown"
    elif name == "description":
        field["widget"] = "text"
    else:
        field["widget"] = "string"
    if element is not None or _is_optional(hint) or hint in (bool, int):
        field["required"] = False
    return field


def _dataclass_fields(cls: type) -> CommentedSeq:
    hints = typ.get_type_hints(cls)
    entries = CommentedSeq()
    for field in dc.fields(cls):
        if field.name == "section_id":
            continue
        entries.append(_widget(field.name, hints[field.name]))
    return entries


def section_types(
    labels: cabc.Mapping[str, str], descriptions: cabc.Mapping[str, str]
) -> CommentedSeq:
    """Return the editor ``types`` list for every registered section kind."""
    entries = CommentedSeq()
    for cls in typ.get_args(KnownSection):
        key = cls.type
        entry = CommentedMap(name=key, label=labels.get(key, key))
        if descriptions.get(key):
            entry["summary"] = descriptions[key]
        entry["widget"] = "object"
        fields = _dataclass_fields(cls)
        fields.insert(
            0,
            CommentedMap(
                label="Section id", name="sectionId", widget="string", required=False
            ),
        )
        entry["fields"] = fields
        entries.append(entry)
    return entries


def _pages_collection(config: SiteConfig, types_list: CommentedSeq) -> CommentedMap:
    seo_fields = CommentedSeq(
        [
            CommentedMap(label="Meta title", name="metaTitle", widget="string"),
            CommentedMap(label="Meta description", name="metaDescription", widget="text"),
            CommentedMap(
                label="Keywords", name="keywords", widget="string", required=False
            ),
            CommentedMap(
                label="Share image", name="shareImage", widget="image", required=False
            ),
        ]
    )
    return CommentedMap(
        name="pages",
        label="Pages",
        folder=config.content.pages.as_posix(),
        extension="json",
        format="json",
        create=True,
        identifier_field="slug",
        fields=CommentedSeq(
            [
                CommentedMap(label="Slug", name="slug", widget="string"),
                CommentedMap(label="Title", name="title", widget="string"),
                CommentedMap(label="SEO", name="seo", widget="object", fields=seo_fields),
                CommentedMap(
                    label="Sections", name="sections", widget="list", types=types_list
                ),
            ]
        ),
    )


def _build_roundtrip_yaml() -> YAML:
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


def _upsert_collection(document: CommentedMap, collection: CommentedMap) -> None:
    collections = document.get("collections")
    if not isinstance(collections, CommentedSeq):
        document["collections"] = CommentedSeq([collection])
        return
    for index, existing in enumerate(collections):
        if isinstance(existing, cabc.Mapping) and existing.get("name") == "pages":
            collections[index] = collection
            return
    collections.append(collection)


def write_cms_config(
    config: SiteConfig,
    output: Path,
    *,
    labels: cabc.Mapping[str, str],
    descriptions: cabc.Mapping[str, str],
) -> Path:
    """Write or update the editor config at ``output``.

    Parameters
    ----------
    config : SiteConfig
        Site configuration supplying the backend repository, branch, auth
        endpoint, media folders and the pages folder.
    output : Path
        Destination ``config.yml``; updated in place when it exists.
    labels, descriptions : Mapping[str, str]
        Friendly names and hints per section type, from the registry.

    Returns
    -------
    Path
        The written path.

    Raises
    ------
    CmsConfigError
        If an existing file does not hold a YAML mapping.
    """
    yaml = _build_roundtrip_yaml()
    document: typ.Any = CommentedMap()
    if output.exists():
        with output.open("r", encoding="utf-8") as handle:
            document = yaml.load(handle) or CommentedMap()
        if not isinstance(document, CommentedMap):
            msg = f"Top-level editor configuration in {output} must be a mapping"
            raise CmsConfigError(msg)

    backend = CommentedMap(name="github", branch=config.cms.branch)
    if config.cms.backend_repo:
        backend["repo"] = config.cms.backend_repo
    backend["base_url"] = config.cms.base_url or config.site.base_url
    backend["auth_endpoint"] = config.cms.auth_endpoint
    document["backend"] = backend
    document["media_folder"] = config.cms.media_folder
    document["public_folder"] = config.cms.public_folder
    _upsert_collection(
        document, _pages_collection(config, section_types(labels, descriptions))
    )

    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as handle:
        yaml.dump(document, handle)
    return output


__all__ = ["CmsConfigError", "section_types", "write_cms_config"]
