"""Load and validate the wedding site configuration YAML.

This subpackage parses the project's ``site.yaml`` file and produces typed
dataclasses (:class:`SiteConfig` and its blocks) that the composer, the
static builder, and the HTTP app consume. The primary entry point is
:func:`load_site_config`, which applies defaults for every optional block.

Examples
--------
>>> from pathlib import Path
>>> from wedding_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.callbacks.signup_target  # doctest: +SKIP
'#rsvp'
"""

from .loader import load_site_config
from .models import (
    CallbackTargets,
    CmsConfig,
    ContentPaths,
    FormEndpoints,
    SiteConfig,
    SiteConfigError,
    SiteIdentity,
)

__all__ = [
    "CallbackTargets",
    "CmsConfig",
    "ContentPaths",
    "FormEndpoints",
    "SiteConfig",
    "SiteConfigError",
    "SiteIdentity",
    "load_site_config",
]
