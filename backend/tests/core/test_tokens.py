"""Token Service — issuance, verification and failure classification.

Tests cover:
    - issue → verify returns the subject and a TTL-wide validity window
    - Expired, tampered and malformed tokens map to distinct TokenErrorKinds
    - Tokens missing required claims are malformed
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from task_manager.core.domain_types import TokenErrorKind
from task_manager.core.tokens import TokenError, TokenService, subject_of

SECRET = "unit-test-secret-with-at-least-thirty-two-bytes"
OTHER_SECRET = "another-secret-also-at-least-thirty-two-bytes!"


def _service(secret=SECRET, ttl=3600, clock=None):
    if clock is None:
        return TokenService(secret, ttl)
    return TokenService(secret, ttl, clock=clock)


def test_issued_token_verifies_to_its_subject():
    service = _service()
    claims = service.verify(service.issue("alice@example.com"))
    assert subject_of(claims) == "alice@example.com"


def test_issued_token_has_three_segments():
    token = _service().issue("alice@example.com")
    assert token.count(".") == 2


def test_expiry_is_issue_time_plus_ttl():
    claims = _service(ttl=120).verify(_service(ttl=120).issue("a@example.com"))
    assert claims.expires_at - claims.issued_at == timedelta(seconds=120)


def test_token_past_its_ttl_is_expired():
    two_hours_ago = datetime.now(timezone.utc) - timedelta(hours=2)
    stale = _service(ttl=60, clock=lambda: two_hours_ago).issue("a@example.com")

    with pytest.raises(TokenError) as exc_info:
        _service().verify(stale)
    assert exc_info.value.kind == TokenErrorKind.EXPIRED


def test_token_signed_with_another_secret_has_invalid_signature():
    foreign = _service(secret=OTHER_SECRET).issue("a@example.com")

    with pytest.raises(TokenError) as exc_info:
        _service().verify(foreign)
    assert exc_info.value.kind == TokenErrorKind.INVALID_SIGNATURE


def test_garbage_token_is_malformed():
    with pytest.raises(TokenError) as exc_info:
        _service().verify("not.a.jwt")
    assert exc_info.value.kind == TokenErrorKind.MALFORMED


def test_token_without_subject_is_malformed():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"iat": now, "exp": now + timedelta(minutes=5)}, SECRET, algorithm="HS256",
    )
    with pytest.raises(TokenError) as exc_info:
        _service().verify(token)
    assert exc_info.value.kind == TokenErrorKind.MALFORMED


def test_token_without_expiry_is_malformed():
    token = jwt.encode(
        {"sub": "a@example.com", "iat": datetime.now(timezone.utc)},
        SECRET, algorithm="HS256",
    )
    with pytest.raises(TokenError) as exc_info:
        _service().verify(token)
    assert exc_info.value.kind == TokenErrorKind.MALFORMED


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        TokenService("", 60)
