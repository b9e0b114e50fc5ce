"""CMS content documents: page models, section parsing, and store loading.

Examples
--------
>>> from pathlib import Path
>>> from wedding_pages.content import load_content_store
>>> store = load_content_store(Path("content"))  # doctest: +SKIP
>>> sorted(store.pages)  # doctest: +SKIP
['faq', 'home', 'travel']
"""

from .loader import load_content_store, parse_page
from .models import (
    ContentStore,
    FooterContent,
    HeaderContent,
    PageDocument,
    Section,
    SeoMeta,
    SiteSettings,
    UnknownSection,
)
from .sections import SECTION_PARSERS, parse_section

__all__ = [
    "SECTION_PARSERS",
    "ContentStore",
    "FooterContent",
    "HeaderContent",
    "PageDocument",
    "Section",
    "SeoMeta",
    "SiteSettings",
    "UnknownSection",
    "load_content_store",
    "parse_page",
    "parse_section",
]
