"""Section registry, renderers, and the view helpers their templates use."""

from .labels import SECTION_DESCRIPTIONS, SECTION_LABELS
from .registry import (
    SectionRegistry,
    SectionRenderer,
    TemplateSectionRenderer,
    default_registry,
)
from .views import SectionCallbacks, calendar_data_uri, resolve_cta, section_anchor

__all__ = [
    "SECTION_DESCRIPTIONS",
    "SECTION_LABELS",
    "SectionCallbacks",
    "SectionRegistry",
    "SectionRenderer",
    "TemplateSectionRenderer",
    "calendar_data_uri",
    "default_registry",
    "resolve_cta",
    "section_anchor",
]
