r"""Newsletter and partnership-inquiry procedures backed by Mailchimp.

Request bodies are validated by pydantic schemas before any upstream call.
When Mailchimp is not configured the procedures log the submission and
succeed in development mode. Upstream failures during a subscription are
logged with full detail and surfaced to callers as one generic message;
partnership inquiries are logged and always succeed.

Example
-------
>>> from wedding_pages.newsletter import HeroSubscription, NewsletterService
>>> from wedding_pages.settings import RuntimeSettings
>>> service = NewsletterService(RuntimeSettings())
>>> service.subscribe_hero(HeroSubscription(email="ana@example.com")).success
True
"""

from __future__ import annotations

import json
import logging
import typing as typ
from http import HTTPStatus

import requests
from pydantic import BaseModel, ConfigDict, Field

from ._constants import (
    EMAIL_PATTERN,
    MAILCHIMP_API_TEMPLATE,
    PARTNERSHIP_TYPES,
    SUBSCRIBER_CATEGORIES,
)
from .errors import UpstreamError

if typ.TYPE_CHECKING:
    from .settings import RuntimeSettings

logger = logging.getLogger(__name__)

SUBSCRIBE_ERROR = "Failed to subscribe. Please try again later."
DEV_MODE_MESSAGE = "Subscription recorded (Mailchimp not configured)"
WELCOME_MESSAGE = "Thanks for subscribing! We'll keep you posted."
ALREADY_SUBSCRIBED_MESSAGE = "You're already subscribed!"
PARTNERSHIP_MESSAGE = (
    "Thank you for your inquiry! We'll get back to you within 2-3 business days."
)
PARTNERSHIP_TAG = "partnership-inquiry"
MEMBER_EXISTS = "Member Exists"

Email = typ.Annotated[str, Field(pattern=EMAIL_PATTERN, max_length=254)]
Category = typ.Literal[SUBSCRIBER_CATEGORIES]
PartnershipType = typ.Literal[PARTNERSHIP_TYPES]


class _Schema(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, str_strip_whitespace=True, frozen=True
    )


class HeroSubscription(_Schema):
    """Email-only signup from the hero form."""

    email: Email


class FullSubscription(_Schema):
    """Signup with first name and optional audience category."""

    email: Email
    first_name: str = Field(alias="firstName", min_length=1)
    category: Category | None = None


class PartnershipInquiry(_Schema):
    """Partnership inquiry submitted from the dialog."""

    name: str = Field(min_length=1)
    email: Email
    organization: str | None = None
    partnership_type: PartnershipType = Field(alias="partnershipType")
    message: str | None = None


class ProcedureResult(_Schema):
    """Response body of every newsletter procedure."""

    success: bool = True
    message: str
    already_subscribed: bool = Field(default=False, alias="alreadySubscribed")


class MailchimpClient:
    """Add audience members through the Mailchimp marketing API."""

    def __init__(
        self,
        *,
        api_key: str,
        audience_id: str,
        server_prefix: str,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialise the client for one audience.

        Parameters
        ----------
        api_key : str
            Mailchimp API key, sent as the basic-auth password.
        audience_id : str
            Identifier of the audience (list) receiving members.
        server_prefix : str
            Data-centre prefix such as ``us21``.
        session : requests.Session, optional
            Preconfigured session; defaults to a new one per client.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``10.0``.
        """
        self._auth = ("anystring", api_key)
        self.audience_id = audience_id
        self.api_base = MAILCHIMP_API_TEMPLATE.format(server_prefix=server_prefix)
        self._session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_settings(
        cls, settings: RuntimeSettings, *, session: requests.Session | None = None
    ) -> MailchimpClient | None:
        """Return a client when Mailchimp is fully configured, else None."""
        if not settings.mailchimp_configured:
            return None
        return cls(
            api_key=typ.cast("str", settings.mailchimp_api_key),
            audience_id=typ.cast("str", settings.mailchimp_audience_id),
            server_prefix=typ.cast("str", settings.mailchimp_server_prefix),
            session=session,
        )

    def add_member(
        self,
        email: str,
        *,
        first_name: str | None = None,
        tag: str | None = None,
    ) -> bool:
        """Subscribe ``email`` to the audience.

        Returns
        -------
        bool
            True when the address was already a member, False when added.

        Raises
        ------
        UpstreamError
            On network failure or any error response other than
            ``Member Exists``.
        """
        body: dict[str, typ.Any] = {"email_address": email, "status": "subscribed"}
        if first_name:
            body["merge_fields"] = {"FNAME": first_name}
        if tag:
            body["tags"] = [tag]

        url = f"{self.api_base}/lists/{self.audience_id}/members"
        try:
            response = self._session.post(
                url, json=body, auth=self._auth, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise UpstreamError(SUBSCRIBE_ERROR, detail=str(exc)) from exc

        if response.status_code < HTTPStatus.BAD_REQUEST:
            return False
        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError):
            payload = {}
        title = str(payload.get("title", "")) if isinstance(payload, dict) else ""
        detail = str(payload.get("detail", "")) if isinstance(payload, dict) else ""
        if title == MEMBER_EXISTS or MEMBER_EXISTS in detail:
            return True
        raise UpstreamError(
            SUBSCRIBE_ERROR,
            detail=detail or f"Mailchimp API error: {response.status_code}",
        )


class NewsletterService:
    """Implement the three newsletter procedures."""

    def __init__(
        self, settings: RuntimeSettings, *, client: MailchimpClient | None = None
    ) -> None:
        self.settings = settings
        self.client = client or MailchimpClient.from_settings(settings)

    def _subscribe(
        self, email: str, *, first_name: str | None, tag: str | None
    ) -> ProcedureResult:
        if self.client is None:
            logger.info("Newsletter subscription (dev mode): %s", email)
            return ProcedureResult(message=DEV_MODE_MESSAGE)
        try:
            existed = self.client.add_member(email, first_name=first_name, tag=tag)
        except UpstreamError as exc:
            logger.error("Newsletter subscription error: %s", exc.detail or exc)
            raise
        return ProcedureResult(
            message=ALREADY_SUBSCRIBED_MESSAGE if existed else WELCOME_MESSAGE,
            already_subscribed=existed,
        )

    def subscribe_hero(self, request: HeroSubscription) -> ProcedureResult:
        """Subscribe an email address from the hero form."""
        return self._subscribe(request.email, first_name=None, tag=None)

    def subscribe_full(self, request: FullSubscription) -> ProcedureResult:
        """Subscribe with first name, tagging the member with its category."""
        return self._subscribe(
            request.email, first_name=request.first_name, tag=request.category
        )

    def partnership_inquiry(self, request: PartnershipInquiry) -> ProcedureResult:
        """Record a partnership inquiry.

        The inquiry is logged and, when Mailchimp is configured, the sender is
        added with the ``partnership-inquiry`` tag. A Mailchimp failure is
        logged and does not fail the inquiry.
        """
        logger.info(
            "New partnership inquiry from %s (%s) type=%s",
            request.name,
            request.organization or "no organisation",
            request.partnership_type,
        )
        if self.client is not None:
            try:
                self.client.add_member(
                    request.email, first_name=request.name, tag=PARTNERSHIP_TAG
                )
            except UpstreamError as exc:
                logger.error("Partnership Mailchimp error: %s", exc.detail or exc)
        return ProcedureResult(message=PARTNERSHIP_MESSAGE)


__all__ = [
    "SUBSCRIBE_ERROR",
    "FullSubscription",
    "HeroSubscription",
    "MailchimpClient",
    "NewsletterService",
    "PartnershipInquiry",
    "ProcedureResult",
]
