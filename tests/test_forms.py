"""Tests for form validation, the submission lifecycle and the HTTP sinks."""

from __future__ import annotations

import typing as typ

import pytest
import requests

from wedding_pages.errors import UpstreamError, ValidationError
from wedding_pages.forms import (
    FormSubmission,
    MailingListClient,
    StaticFormCollector,
    SubmissionInFlightError,
    SubmissionStatus,
    validate_full_signup,
    validate_hero_signup,
    validate_partnership,
    validate_rsvp,
)
from wedding_pages.forms.sinks import FORM_ERROR_MESSAGE

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _response(mocker: MockerFixture, status: int, payload: typ.Any = None) -> typ.Any:
    response = mocker.Mock(spec=requests.Response)
    response.status_code = status
    if payload is None:
        response.json.side_effect = ValueError("no body")
    else:
        response.json.return_value = payload
    return response


@pytest.mark.parametrize("email", ["", "not-an-email", "a@b", "a b@c.d"])
def test_hero_signup_rejects_invalid_email(email: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_hero_signup({"email": email})
    assert "email" in excinfo.value.field_errors


def test_full_signup_checks_name_and_category() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_full_signup({"email": "ana@example.com", "category": "aliens"})
    assert set(excinfo.value.field_errors) == {"firstName", "category"}

    cleaned = validate_full_signup(
        {"email": " ana@example.com ", "firstName": "Ana", "category": "parent"}
    )
    assert cleaned == {
        "email": "ana@example.com",
        "firstName": "Ana",
        "category": "parent",
    }


def test_partnership_requires_known_type() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_partnership(
            {"name": "Ana", "email": "ana@example.com", "partnershipType": "x"}
        )
    assert list(excinfo.value.field_errors) == ["partnershipType"]


def test_rsvp_validation_rules() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_rsvp({"name": "A", "email": "bad", "guests": "7"})
    assert set(excinfo.value.field_errors) == {"name", "email", "attendance", "guests"}

    cleaned = validate_rsvp(
        {
            "name": "Ana López",
            "email": "ana@example.com",
            "attendance": "yes",
            "guests": "2",
            "mealChoice": "pescado",
            "dietary": "",
        }
    )
    assert cleaned == {
        "name": "Ana López",
        "email": "ana@example.com",
        "attendance": "yes",
        "guests": "2",
        "mealChoice": "pescado",
    }


def test_invalid_hero_email_makes_no_network_call(mocker: MockerFixture) -> None:
    session = mocker.Mock(spec=requests.Session)
    form = FormSubmission(
        "hero-signup",
        MailingListClient("/api/newsletter", session=session),
        validate_hero_signup,
    )

    status = form.submit({"email": "nope"})

    assert status is SubmissionStatus.IDLE, "validation failure keeps the state"
    assert form.field_errors["email"]
    assert session.post.call_count == 0, "no request may be sent for invalid input"


def test_rsvp_submission_lifecycle(mocker: MockerFixture) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.post.return_value = _response(mocker, 200)
    clock = FakeClock()
    form = FormSubmission(
        "rsvp",
        StaticFormCollector("/", session=session),
        validate_rsvp,
        dwell=15.0,
        clock=clock,
    )
    form.update(name="Ana López", email="ana@example.com", attendance="no")

    assert form.submit() is SubmissionStatus.SUCCESS
    assert form.history == [
        SubmissionStatus.IDLE,
        SubmissionStatus.SUBMITTING,
        SubmissionStatus.SUCCESS,
    ]
    assert form.fields == {}, "fields are cleared after success"
    data = session.post.call_args.kwargs["data"]
    assert data["form-name"] == "rsvp"
    assert data["attendance"] == "no"

    clock.now += 14.0
    assert form.tick() is SubmissionStatus.SUCCESS
    clock.now += 1.0
    assert form.tick() is SubmissionStatus.IDLE


def test_failed_send_lands_in_error_and_allows_resubmit(
    mocker: MockerFixture,
) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.post.side_effect = [
        _response(mocker, 500),
        _response(mocker, 200),
    ]
    form = FormSubmission(
        "rsvp", StaticFormCollector("/", session=session), validate_rsvp
    )
    fields = {"name": "Ana", "email": "ana@example.com", "attendance": "yes"}

    assert form.submit(fields) is SubmissionStatus.ERROR
    assert form.error == FORM_ERROR_MESSAGE
    assert session.post.call_count == 1, "failures are not retried automatically"

    assert form.submit(fields) is SubmissionStatus.SUCCESS
    assert form.error is None


def test_resubmitting_from_success_passes_through_idle(
    mocker: MockerFixture,
) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.post.return_value = _response(mocker, 200)
    form = FormSubmission(
        "rsvp", StaticFormCollector("/", session=session), validate_rsvp
    )
    fields = {"name": "Ana", "email": "ana@example.com", "attendance": "yes"}
    form.submit(fields)
    form.submit(fields)

    assert form.history[-3:] == [
        SubmissionStatus.IDLE,
        SubmissionStatus.SUBMITTING,
        SubmissionStatus.SUCCESS,
    ]


def test_submit_while_in_flight_is_rejected(mocker: MockerFixture) -> None:
    form = FormSubmission("rsvp", mocker.Mock(), validate_rsvp)
    form.status = SubmissionStatus.SUBMITTING

    with pytest.raises(SubmissionInFlightError):
        form.submit({"name": "Ana", "email": "ana@example.com", "attendance": "yes"})


def test_collector_network_failure_raises_upstream_error(
    mocker: MockerFixture,
) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.post.side_effect = requests.ConnectionError("down")
    with pytest.raises(UpstreamError) as excinfo:
        StaticFormCollector("/", session=session).send("rsvp", {"name": "Ana"})
    assert excinfo.value.detail == "down"


def test_mailing_list_client_posts_json_and_returns_message(
    mocker: MockerFixture,
) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.post.return_value = _response(
        mocker, 200, {"success": True, "message": "¡Gracias!"}
    )
    client = MailingListClient("https://site.example/api/newsletter/", session=session)

    message = client.send("full-signup", {"email": "ana@example.com"})

    assert message == "¡Gracias!"
    url = session.post.call_args.args[0]
    assert url == "https://site.example/api/newsletter/subscribe-full"
    assert session.post.call_args.kwargs["json"] == {"email": "ana@example.com"}


def test_mailing_list_client_surfaces_error_detail(mocker: MockerFixture) -> None:
    session = mocker.Mock(spec=requests.Session)
    session.post.return_value = _response(mocker, 500, {"detail": "Failed"})
    with pytest.raises(UpstreamError, match="Failed"):
        MailingListClient("/api", session=session).send(
            "hero-signup", {"email": "ana@example.com"}
        )
