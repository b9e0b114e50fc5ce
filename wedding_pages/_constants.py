"""Common literal values used across wedding_pages.

These constants keep slugs, dwell times, and upstream endpoints centralized so
templates, the HTTP app, and tests can import the same values without
drifting. Intended for internal use within the wedding_pages package.

Examples
--------
>>> from wedding_pages import _constants
>>> _constants.DEFAULT_SLUG
'home'
>>> _constants.PAGE_OUTPUT_TEMPLATE.format(slug="faq")
'faq/index.html'
"""

DEFAULT_SLUG = "home"
PAGE_OUTPUT_TEMPLATE = "{slug}/index.html"
NOT_FOUND_OUTPUT = "404.html"

GITHUB_API_BASE = "https://api.github.com"
GITHUB_ACCEPT_HEADER = "application/vnd.github.v3+json"
PROXY_USER_AGENT = "wedding-pages-cms-proxy"

MAILCHIMP_API_TEMPLATE = "https://{server_prefix}.api.mailchimp.com/3.0"

MODAL_DWELL_SECONDS = 2.0
INLINE_DWELL_SECONDS = 15.0

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

SUBSCRIBER_CATEGORIES = ("parent", "school", "business", "other")
PARTNERSHIP_TYPES = (
    "field-trip",
    "birthday",
    "corporate",
    "community",
    "sponsorship",
    "other",
)
