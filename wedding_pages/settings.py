"""Process configuration read by the HTTP handlers.

Secrets (the repository-write token and the Mailchimp key) only ever live in
the server process environment. :class:`RuntimeSettings` snapshots them into
an immutable value so handlers never reach into ``os.environ`` directly, and
its ``repr`` masks every secret so a stray log line cannot leak one.
"""

from __future__ import annotations

import dataclasses as dc
import os
import typing as typ
from pathlib import Path

from ._constants import GITHUB_API_BASE
from .errors import ConfigurationError

DEFAULT_SITE_CONFIG = Path("config/site.yaml")


@dc.dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Read-only snapshot of the server-side process configuration."""

    github_token: str | None = dc.field(default=None, repr=False)
    github_repo: str | None = None
    github_api_url: str = GITHUB_API_BASE
    mailchimp_api_key: str | None = dc.field(default=None, repr=False)
    mailchimp_audience_id: str | None = None
    mailchimp_server_prefix: str | None = None
    site_config_path: Path = DEFAULT_SITE_CONFIG

    @classmethod
    def from_env(
        cls, environ: typ.Mapping[str, str] | None = None
    ) -> RuntimeSettings:
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Blank values are treated as unset so an exported-but-empty variable
        fails the same way a missing one does.
        """
        env = os.environ if environ is None else environ

        def _get(key: str) -> str | None:
            value = env.get(key, "").strip()
            return value or None

        return cls(
            github_token=_get("GITHUB_TOKEN"),
            github_repo=_get("GITHUB_REPO"),
            github_api_url=(_get("GITHUB_API_URL") or GITHUB_API_BASE).rstrip("/"),
            mailchimp_api_key=_get("MAILCHIMP_API_KEY"),
            mailchimp_audience_id=_get("MAILCHIMP_AUDIENCE_ID"),
            mailchimp_server_prefix=_get("MAILCHIMP_SERVER_PREFIX"),
            site_config_path=Path(_get("PAGES_CONFIG") or DEFAULT_SITE_CONFIG),
        )

    @property
    def mailchimp_configured(self) -> bool:
        """Return True when every Mailchimp setting is present."""
        return bool(
            self.mailchimp_api_key
            and self.mailchimp_audience_id
            and self.mailchimp_server_prefix
        )

    def require_github(self) -> tuple[str, str]:
        """Return ``(token, repo)`` or raise :class:`ConfigurationError`."""
        if not self.github_token or not self.github_repo:
            msg = "GitHub configuration missing. Set GITHUB_TOKEN and GITHUB_REPO."
            raise ConfigurationError(msg)
        return self.github_token, self.github_repo


__all__ = ["DEFAULT_SITE_CONFIG", "RuntimeSettings"]
