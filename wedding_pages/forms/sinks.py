"""HTTP sinks for validated form submissions.

Two destinations exist: the static form collector, which accepts
urlencoded bodies tagged with ``form-name``, and the newsletter procedures,
which accept JSON. Both treat any 2xx response as success and surface every
other outcome as :class:`~wedding_pages.errors.UpstreamError` without
retrying.
"""

from __future__ import annotations

import json
import typing as typ
from http import HTTPStatus

import requests

from ..errors import UpstreamError

if typ.TYPE_CHECKING:
    from .validation import Fields

FORM_ERROR_MESSAGE = "Hubo un error. Por favor intenta de nuevo."
MAILING_LIST_PROCEDURES = {
    "hero-signup": "subscribe-hero",
    "full-signup": "subscribe-full",
    "partnership": "partnership-inquiry",
}


def _is_success(response: requests.Response) -> bool:
    return HTTPStatus.OK <= response.status_code < HTTPStatus.MULTIPLE_CHOICES


class StaticFormCollector:
    """Post urlencoded form data to the static form collector."""

    def __init__(
        self,
        endpoint: str,
        *,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.endpoint = endpoint
        self._session = session or requests.Session()
        self.timeout = timeout

    def send(self, form_name: str, fields: Fields) -> str | None:
        """Submit ``fields`` tagged with ``form-name``; any 2xx is success."""
        data = {"form-name": form_name, **fields}
        try:
            response = self._session.post(
                self.endpoint,
                data=data,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise UpstreamError(FORM_ERROR_MESSAGE, detail=str(exc)) from exc
        if not _is_success(response):
            detail = f"collector responded {response.status_code}"
            raise UpstreamError(FORM_ERROR_MESSAGE, detail=detail)
        return None


class MailingListClient:
    """Call the newsletter procedures with JSON bodies."""

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self.timeout = timeout

    def send(self, form_name: str, fields: Fields) -> str | None:
        """Post ``fields`` to the procedure for ``form_name``.

        Returns
        -------
        str | None
            The confirmation message returned by the procedure, if any.

        Raises
        ------
        KeyError
            If ``form_name`` has no newsletter procedure.
        UpstreamError
            On network failure, a non-2xx status, or an error payload.
        """
        procedure = MAILING_LIST_PROCEDURES[form_name]
        try:
            response = self._session.post(
                f"{self.base_url}/{procedure}", json=fields, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise UpstreamError(FORM_ERROR_MESSAGE, detail=str(exc)) from exc
        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError):
            payload = {}
        if not _is_success(response):
            message = payload.get("detail") if isinstance(payload, dict) else None
            raise UpstreamError(
                message if isinstance(message, str) else FORM_ERROR_MESSAGE,
                detail=f"{procedure} responded {response.status_code}",
            )
        message = payload.get("message") if isinstance(payload, dict) else None
        return message if isinstance(message, str) else None


__all__ = [
    "FORM_ERROR_MESSAGE",
    "MAILING_LIST_PROCEDURES",
    "MailingListClient",
    "StaticFormCollector",
]
