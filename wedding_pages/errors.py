"""Exception taxonomy shared by the renderer, forms, and HTTP handlers."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a required secret or setting is absent."""


class ContentError(ValueError):
    """Raised when the content store cannot be loaded."""


class PageNotFoundError(KeyError):
    """Raised when a requested slug has no matching page document."""

    def __init__(self, slug: str) -> None:
        super().__init__(slug)
        self.slug = slug

    def __str__(self) -> str:
        return f"No page document for slug '{self.slug}'"


class ValidationError(ValueError):
    """Raised when form input fails validation before any network call.

    Attributes
    ----------
    field_errors : dict[str, str]
        Inline messages keyed by form field name.
    """

    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = dict(field_errors)
        summary = "; ".join(f"{key}: {msg}" for key, msg in self.field_errors.items())
        super().__init__(summary or "Invalid form input")


class UpstreamError(RuntimeError):
    """Raised when the mailing-list or hosting API call fails.

    The message is safe to show to a visitor; ``detail`` holds the underlying
    diagnosis and is only ever logged.
    """

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail


__all__ = [
    "ConfigurationError",
    "ContentError",
    "PageNotFoundError",
    "UpstreamError",
    "ValidationError",
]
