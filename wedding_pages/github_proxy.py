r"""Relay the content editor's repository operations to the GitHub API.

The editor never holds the repository-write token. It calls
``/github-proxy?action=<name>&...`` and this module maps each action to
exactly one upstream request, authenticates it server-side, and passes the
upstream status and body back unchanged apart from CORS headers. Unknown
actions are rejected with ``400`` before any upstream call is made.

Example
-------
>>> from wedding_pages.github_proxy import ProxyRequest, route_action
>>> call = route_action(ProxyRequest("tree", "GET", {"sha": "abc", "recursive": "true"}),
...                     repo="owner/site")
>>> call.path
'/repos/owner/site/git/trees/abc?recursive=1'
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import typing as typ
from http import HTTPStatus

import requests

from ._constants import GITHUB_ACCEPT_HEADER, PROXY_USER_AGENT
from .errors import ConfigurationError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .settings import RuntimeSettings

logger = logging.getLogger(__name__)

PROXY_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, PATCH, OPTIONS",
    "Content-Type": "application/json",
}
BODYLESS_METHODS = frozenset({"GET", "HEAD"})
DEFAULT_BRANCH = "main"
DEFAULT_REF = "heads/main"


class ProxyRequestError(ValueError):
    """Raised when a proxy request cannot be mapped to an upstream call."""


@dc.dataclass(frozen=True, slots=True)
class ProxyRequest:
    """Incoming editor request: action, HTTP method, query and body."""

    action: str
    method: str = "GET"
    params: cabc.Mapping[str, str] = dc.field(default_factory=dict)
    body: bytes | None = None


@dc.dataclass(frozen=True, slots=True)
class UpstreamCall:
    """The single upstream request an action maps to."""

    method: str
    path: str


@dc.dataclass(frozen=True, slots=True)
class ProxyResponse:
    """Status, body and headers returned to the editor."""

    status: int
    body: bytes = b""
    headers: cabc.Mapping[str, str] = dc.field(
        default_factory=lambda: dict(PROXY_HEADERS)
    )


def _error(status: int, payload: dict[str, str]) -> ProxyResponse:
    return ProxyResponse(status, json.dumps(payload).encode("utf-8"))


def route_action(request: ProxyRequest, *, repo: str) -> UpstreamCall:
    """Map an editor action to its upstream method and path.

    Raises
    ------
    ProxyRequestError
        If the action is unknown or a blob request has neither a ``sha`` to
        read nor a ``POST`` body to create.
    """
    method = request.method.upper()
    params = request.params
    base = f"/repos/{repo}"
    match request.action:
        case "user":
            path = "/user"
        case "repo":
            path = base
        case "branch":
            path = f"{base}/branches/{params.get('branch') or DEFAULT_BRANCH}"
        case "tree":
            sha = params.get("sha") or DEFAULT_BRANCH
            suffix = "?recursive=1" if params.get("recursive") == "true" else ""
            path = f"{base}/git/trees/{sha}{suffix}"
        case "blob" if method == "GET" and params.get("sha"):
            path = f"{base}/git/blobs/{params['sha']}"
        case "blob" if method == "POST":
            path = f"{base}/git/blobs"
        case "blob":
            msg = "Invalid blob request"
            raise ProxyRequestError(msg)
        case "contents":
            ref = params.get("ref") or DEFAULT_BRANCH
            path = f"{base}/contents/{params.get('path', '')}?ref={ref}"
        case "commit":
            path = f"{base}/git/commits"
        case "ref":
            ref = params.get("ref") or DEFAULT_REF
            kind = "ref" if method == "GET" else "refs"
            path = f"{base}/git/{kind}/{ref}"
        case "createTree":
            path = f"{base}/git/trees"
        case other:
            msg = f"Unknown action: {other}"
            raise ProxyRequestError(msg)
    return UpstreamCall(method=method, path=path)


class RepositoryProxy:
    """Authenticated relay to the GitHub REST API for one repository."""

    def __init__(
        self,
        *,
        token: str,
        repo: str,
        api_base: str,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._repo = repo
        self._api_base = api_base.rstrip("/")
        self._session = session or requests.Session()
        self.timeout = timeout
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": GITHUB_ACCEPT_HEADER,
            "Content-Type": "application/json",
            "User-Agent": PROXY_USER_AGENT,
        }

    @classmethod
    def from_settings(
        cls, settings: RuntimeSettings, *, session: requests.Session | None = None
    ) -> RepositoryProxy:
        """Build a proxy from settings, raising if the token or repo is unset."""
        token, repo = settings.require_github()
        return cls(
            token=token, repo=repo, api_base=settings.github_api_url, session=session
        )

    def handle(self, request: ProxyRequest) -> ProxyResponse:
        """Perform the upstream call for ``request`` and relay its outcome."""
        if request.method.upper() == "OPTIONS":
            return ProxyResponse(HTTPStatus.NO_CONTENT)
        try:
            call = route_action(request, repo=self._repo)
        except ProxyRequestError as exc:
            return _error(HTTPStatus.BAD_REQUEST, {"error": str(exc)})

        data = None if call.method in BODYLESS_METHODS else request.body
        try:
            upstream = self._session.request(
                call.method,
                f"{self._api_base}{call.path}",
                headers=self._headers,
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.exception("GitHub proxy error for action %s", request.action)
            return _error(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                {"error": "Proxy error", "message": str(exc)},
            )
        return ProxyResponse(upstream.status_code, upstream.content)


def handle_proxy_request(
    settings: RuntimeSettings,
    request: ProxyRequest,
    *,
    session: requests.Session | None = None,
) -> ProxyResponse:
    """Answer one editor request, including preflight and missing config."""
    if request.method.upper() == "OPTIONS":
        return ProxyResponse(HTTPStatus.NO_CONTENT)
    try:
        proxy = RepositoryProxy.from_settings(settings, session=session)
    except ConfigurationError as exc:
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, {"error": str(exc)})
    return proxy.handle(request)


__all__ = [
    "PROXY_HEADERS",
    "ProxyRequest",
    "ProxyRequestError",
    "ProxyResponse",
    "RepositoryProxy",
    "UpstreamCall",
    "handle_proxy_request",
    "route_action",
]
