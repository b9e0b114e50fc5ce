"""Tests for the newsletter and partnership procedures."""

from __future__ import annotations

import logging
import typing as typ

import pytest
import requests
from pydantic import ValidationError

from wedding_pages.errors import UpstreamError
from wedding_pages.newsletter import (
    SUBSCRIBE_ERROR,
    FullSubscription,
    HeroSubscription,
    MailchimpClient,
    NewsletterService,
    PartnershipInquiry,
)
from wedding_pages.settings import RuntimeSettings

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

CONFIGURED = RuntimeSettings(
    mailchimp_api_key="key-us21",
    mailchimp_audience_id="list123",
    mailchimp_server_prefix="us21",
)


def _client(mocker: MockerFixture, status: int, payload: typ.Any = None) -> typ.Any:
    session = mocker.Mock(spec=requests.Session)
    response = mocker.Mock(spec=requests.Response)
    response.status_code = status
    response.json.return_value = payload or {}
    session.post.return_value = response
    return session


def test_schemas_reject_bad_input() -> None:
    with pytest.raises(ValidationError):
        HeroSubscription(email="not-an-email")
    with pytest.raises(ValidationError):
        FullSubscription.model_validate(
            {"email": "ana@example.com", "firstName": "Ana", "category": "aliens"}
        )
    inquiry = PartnershipInquiry.model_validate(
        {"name": "Ana", "email": "ana@example.com", "partnershipType": "corporate"}
    )
    assert inquiry.partnership_type == "corporate"


def test_dev_mode_records_without_upstream(caplog: pytest.LogCaptureFixture) -> None:
    service = NewsletterService(RuntimeSettings())
    assert service.client is None

    with caplog.at_level(logging.INFO):
        result = service.subscribe_hero(HeroSubscription(email="ana@example.com"))

    assert result.success
    assert "not configured" in result.message
    assert "ana@example.com" in caplog.text


def test_full_subscription_sends_name_and_category_tag(
    mocker: MockerFixture,
) -> None:
    session = _client(mocker, 200, {"id": "abc"})
    client = MailchimpClient.from_settings(CONFIGURED, session=session)
    assert client is not None

    result = NewsletterService(CONFIGURED, client=client).subscribe_full(
        FullSubscription.model_validate(
            {"email": "ana@example.com", "firstName": "Ana", "category": "parent"}
        )
    )

    assert result.success and not result.already_subscribed
    url = session.post.call_args.args[0]
    assert url == "https://us21.api.mailchimp.com/3.0/lists/list123/members"
    body = session.post.call_args.kwargs["json"]
    assert body == {
        "email_address": "ana@example.com",
        "status": "subscribed",
        "merge_fields": {"FNAME": "Ana"},
        "tags": ["parent"],
    }
    assert session.post.call_args.kwargs["auth"] == ("anystring", "key-us21")


def test_existing_member_is_reported_as_already_subscribed(
    mocker: MockerFixture,
) -> None:
    session = _client(mocker, 400, {"title": "Member Exists", "detail": "x"})
    client = MailchimpClient.from_settings(CONFIGURED, session=session)

    result = NewsletterService(CONFIGURED, client=client).subscribe_hero(
        HeroSubscription(email="ana@example.com")
    )

    assert result.success
    assert result.already_subscribed
    assert result.model_dump(by_alias=True)["alreadySubscribed"] is True


def test_upstream_failure_surfaces_generic_message(
    mocker: MockerFixture, caplog: pytest.LogCaptureFixture
) -> None:
    session = _client(mocker, 500, {"title": "Internal", "detail": "list gone"})
    client = MailchimpClient.from_settings(CONFIGURED, session=session)

    with caplog.at_level(logging.ERROR), pytest.raises(UpstreamError) as excinfo:
        NewsletterService(CONFIGURED, client=client).subscribe_hero(
            HeroSubscription(email="ana@example.com")
        )

    assert str(excinfo.value) == SUBSCRIBE_ERROR
    assert "list gone" in caplog.text, "the upstream detail is logged"


def test_partnership_inquiry_succeeds_despite_mailchimp_failure(
    mocker: MockerFixture,
) -> None:
    session = _client(mocker, 500, {"detail": "boom"})
    client = MailchimpClient.from_settings(CONFIGURED, session=session)

    result = NewsletterService(CONFIGURED, client=client).partnership_inquiry(
        PartnershipInquiry.model_validate(
            {
                "name": "Ana",
                "email": "ana@example.com",
                "partnershipType": "community",
                "organization": "Peña",
            }
        )
    )

    assert result.success
    assert session.post.call_args.kwargs["json"]["tags"] == ["partnership-inquiry"]
