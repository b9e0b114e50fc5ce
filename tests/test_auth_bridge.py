"""Tests for the editor credential handshake."""

from __future__ import annotations

import json

import pytest

from wedding_pages.auth_bridge import (
    ADMIN_PATH,
    AuthBridge,
    AuthMessageError,
    parse_auth_message,
)
from wedding_pages.settings import RuntimeSettings

ORIGIN = "https://valenypedrito.com"


def test_missing_token_returns_configuration_error_page() -> None:
    result = AuthBridge().callback(RuntimeSettings(github_token=None))

    assert result.status == 500
    assert "Configuration Error" in result.body
    assert "GITHUB_TOKEN" in result.body
    assert "postMessage" not in result.body


def test_callback_page_posts_token_to_same_origin_opener() -> None:
    result = AuthBridge().callback(RuntimeSettings(github_token='tok"en</script>'))

    assert result.status == 200
    assert result.headers["Access-Control-Allow-Origin"] == "*"
    assert "window.opener" in result.body
    assert "window.location.origin" in result.body
    assert json.dumps(ADMIN_PATH) in result.body
    assert "</script>\"" not in result.body, "the token is escaped for script context"


def test_preflight_has_no_body() -> None:
    result = AuthBridge().preflight()
    assert result.status == 204
    assert result.body == ""


def test_parse_auth_message_accepts_same_origin_json() -> None:
    message = parse_auth_message(
        json.dumps({"token": "abc", "provider": "github"}), ORIGIN, ORIGIN + "/"
    )
    assert message.token == "abc"
    assert "abc" not in repr(message), "the token never appears in reprs"


@pytest.mark.parametrize(
    ("raw", "origin"),
    [
        ('{"token": "abc", "provider": "github"}', "https://evil.example"),
        ("not json", ORIGIN),
        ('["token"]', ORIGIN),
        ('{"token": "", "provider": "github"}', ORIGIN),
        ('{"token": "abc", "provider": "gitlab"}', ORIGIN),
        ('{"token": "abc", "provider": "github", "extra": 1}', ORIGIN),
    ],
)
def test_parse_auth_message_rejects_bad_messages(raw: str, origin: str) -> None:
    with pytest.raises(AuthMessageError):
        parse_auth_message(raw, origin, ORIGIN)
