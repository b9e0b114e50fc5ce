"""Map request paths to loaded page documents."""

from __future__ import annotations

import typing as typ
from types import MappingProxyType

from ._constants import DEFAULT_SLUG
from .errors import PageNotFoundError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .content.models import PageDocument


class PageResolver:
    """Exact, case-sensitive slug lookup over an immutable document set.

    Examples
    --------
    >>> resolver = PageResolver(store.pages)  # doctest: +SKIP
    >>> resolver.resolve("/").slug  # doctest: +SKIP
    'home'
    """

    def __init__(
        self,
        documents: cabc.Mapping[str, PageDocument],
        default_slug: str = DEFAULT_SLUG,
    ) -> None:
        self._documents = MappingProxyType(dict(documents))
        self.default_slug = default_slug

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.find(path) is not None

    def slugs(self) -> list[str]:
        """Return the loaded slugs in load order."""
        return list(self._documents)

    def slug_for(self, path: str) -> str:
        """Return the slug addressed by ``path``; the root maps to the default."""
        return path.strip("/") or self.default_slug

    def find(self, path: str) -> PageDocument | None:
        """Return the document for ``path`` or None when no slug matches."""
        return self._documents.get(self.slug_for(path))

    def resolve(self, path: str) -> PageDocument:
        """Return the document for ``path``.

        Raises
        ------
        PageNotFoundError
            If no loaded document has the requested slug.
        """
        page = self.find(path)
        if page is None:
            raise PageNotFoundError(self.slug_for(path))
        return page


__all__ = ["PageResolver"]
