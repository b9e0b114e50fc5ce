"""Hand the repository-write credential to the in-browser content editor.

The editor opens ``/auth-callback`` in a popup once the visitor has passed
the separate identity gate. The response page posts
``{"token": ..., "provider": "github"}`` to ``window.opener`` restricted to
the page's own origin and closes itself; without an opener it returns to the
editor at ``/admin/``. The token is serialised into the page with Jinja's
``tojson`` filter and is never logged. When the token is not configured the
bridge answers with an explicit configuration-error page instead.
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ
from http import HTTPStatus

from pydantic import BaseModel, ConfigDict, Field

from .templating import create_environment

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from .settings import RuntimeSettings

AUTH_PROVIDER = "github"
ADMIN_PATH = "/admin/"
AUTH_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}
MISSING_TOKEN_DETAIL = (
    "GITHUB_TOKEN environment variable is not set. Configure it in the "
    "server environment and reload the editor."
)


class AuthMessageError(ValueError):
    """Raised when a received handshake message must be rejected."""


class AuthMessage(BaseModel):
    """Handshake message posted from the callback window to the editor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: str = Field(min_length=1, repr=False)
    provider: typ.Literal["github"] = AUTH_PROVIDER


@dc.dataclass(frozen=True, slots=True)
class AuthResponse:
    """HTTP response produced by the auth bridge."""

    status: int
    body: str = ""
    headers: typ.Mapping[str, str] = dc.field(default_factory=dict)


class AuthBridge:
    """Render the callback page, or the configuration-error page."""

    def __init__(self, env: Environment | None = None) -> None:
        env = env or create_environment()
        self.callback_template = env.get_template("auth_callback.jinja")
        self.error_template = env.get_template("auth_error.jinja")

    def preflight(self) -> AuthResponse:
        """Answer a CORS preflight request."""
        return AuthResponse(HTTPStatus.NO_CONTENT, headers=AUTH_CORS_HEADERS)

    def callback(self, settings: RuntimeSettings) -> AuthResponse:
        """Return the handshake page for the configured credential.

        Returns
        -------
        AuthResponse
            ``200`` with the handshake page, or ``500`` with a diagnostic page
            that contains no token when ``GITHUB_TOKEN`` is unset.
        """
        headers = {**AUTH_CORS_HEADERS, "Content-Type": "text/html; charset=utf-8"}
        if not settings.github_token:
            body = self.error_template.render(detail=MISSING_TOKEN_DETAIL)
            return AuthResponse(HTTPStatus.INTERNAL_SERVER_ERROR, body, headers)
        message = AuthMessage(token=settings.github_token)
        body = self.callback_template.render(
            message=message.model_dump(), admin_path=ADMIN_PATH
        )
        return AuthResponse(HTTPStatus.OK, body, headers)


def parse_auth_message(
    raw: str | bytes | typ.Mapping[str, typ.Any],
    origin: str,
    expected_origin: str,
) -> AuthMessage:
    """Validate a handshake message on receipt.

    Parameters
    ----------
    raw : str | bytes | Mapping
        Message data as delivered: the JSON string posted by the callback
        page, or an already decoded mapping.
    origin : str
        Origin reported for the sender.
    expected_origin : str
        Origin the editor is served from.

    Raises
    ------
    AuthMessageError
        If the origin differs, the payload is not JSON, or it does not match
        the ``{token, provider: "github"}`` schema.
    """
    if origin.rstrip("/") != expected_origin.rstrip("/"):
        msg = f"Rejected auth message from unexpected origin {origin!r}"
        raise AuthMessageError(msg)
    try:
        data = json.loads(raw) if isinstance(raw, (str, bytes)) else dict(raw)
    except json.JSONDecodeError as exc:
        msg = "Auth message is not valid JSON"
        raise AuthMessageError(msg) from exc
    if not isinstance(data, dict):
        msg = "Auth message must be a JSON object"
        raise AuthMessageError(msg)
    try:
        return AuthMessage.model_validate(data)
    except ValueError as exc:
        msg = "Auth message does not match the expected schema"
        raise AuthMessageError(msg) from exc


__all__ = [
    "ADMIN_PATH",
    "AUTH_CORS_HEADERS",
    "AuthBridge",
    "AuthMessage",
    "AuthMessageError",
    "AuthResponse",
    "parse_auth_message",
]
