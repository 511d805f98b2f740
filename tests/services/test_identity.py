"""Tests for signed session tokens and request-based session lookup."""

import time
from uuid import uuid4

import pytest
from starlette.requests import Request

from pressroom.infrastructure.identity import SignedTokenIdentity


@pytest.fixture
def identity():
    return SignedTokenIdentity("secret", max_age_seconds=3600, cookie_name="sid")


def _request(headers: dict) -> Request:
    return Request({
        "type": "http",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
    })


def test_issued_token_round_trips(identity):
    user_id = uuid4()

    session = identity.verify(identity.issue(user_id))

    assert session is not None
    assert session.user_id == user_id


def test_token_from_other_secret_is_rejected(identity):
    other = SignedTokenIdentity("other", max_age_seconds=3600, cookie_name="sid")

    assert identity.verify(other.issue(uuid4())) is None


def test_tampered_and_empty_tokens_are_rejected(identity):
    token = identity.issue(uuid4())

    assert identity.verify(token[:-2] + "xx") is None
    assert identity.verify("not-a-token") is None
    assert identity.verify("") is None
    assert identity.verify(None) is None


def test_expired_token_is_rejected(identity, monkeypatch):
    monkeypatch.setattr(
        identity._signer, "get_timestamp", lambda: int(time.time()) - 7200,
    )
    token = identity.issue(uuid4())
    monkeypatch.undo()

    assert identity.verify(token) is None


def test_signed_non_uuid_payload_is_rejected(identity):
    token = identity._signer.sign("admin").decode()

    assert identity.verify(token) is None


def test_session_from_cookie(identity):
    user_id = uuid4()
    request = _request({"cookie": f"sid={identity.issue(user_id)}"})

    assert identity.current_session(request).user_id == user_id


def test_session_from_bearer_header(identity):
    user_id = uuid4()
    request = _request({"authorization": f"Bearer {identity.issue(user_id)}"})

    assert identity.current_session(request).user_id == user_id


def test_cookie_wins_over_bearer(identity):
    cookie_user, header_user = uuid4(), uuid4()
    request = _request({
        "cookie": f"sid={identity.issue(cookie_user)}",
        "authorization": f"Bearer {identity.issue(header_user)}",
    })

    assert identity.current_session(request).user_id == cookie_user


def test_no_credentials_is_no_session(identity):
    assert identity.current_session(_request({})) is None
    assert identity.current_session(_request({"authorization": "Basic abc"})) is None
