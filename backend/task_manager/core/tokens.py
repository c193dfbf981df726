"""Token Service — issues and verifies signed, time-limited bearer tokens.

Invariants:
    - Every token carries sub (user email), iat and exp claims, HS256-signed
    - verify() either returns claims or raises TokenError with a TokenErrorKind
    - Verification is stateless: no revocation list, a token is valid for its whole TTL
      (a password change does not invalidate it, an email change does)

Design Decisions:
    - PyJWT for encoding/verification: signature and expiry checks are the library's,
      this module only maps its exceptions onto the three failure kinds
    - Subject is the email, not the id: the authentication gate resolves principals
      through lookup-by-email without an extra id-to-email join
    - Clock injectable for issuance so expiry can be tested without sleeping
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from task_manager.core.domain_types import TokenErrorKind

_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenError(Exception):
    """Bearer token rejected — kind says why."""

    def __init__(self, kind: TokenErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass(frozen=True)
class TokenClaims:
    """Verified token payload."""
    subject: str
    issued_at: datetime
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """HMAC-signed JWT issuance and verification."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(seconds=ttl_seconds)
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, subject: str) -> str:
        """Produce a signed token for subject, expiring after the configured TTL."""
        issued_at = self._clock()
        payload = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Check signature and expiry. Raises TokenError on any failure."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenError(TokenErrorKind.EXPIRED, str(e)) from e
        except jwt.InvalidSignatureError as e:
            raise TokenError(TokenErrorKind.INVALID_SIGNATURE, str(e)) from e
        except jwt.InvalidTokenError as e:
            raise TokenError(TokenErrorKind.MALFORMED, str(e)) from e

        subject = payload["sub"]
        if not isinstance(subject, str) or not subject:
            raise TokenError(TokenErrorKind.MALFORMED, "token subject is empty")
        return TokenClaims(
            subject=subject,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


def subject_of(claims: TokenClaims) -> str:
    """Return the subject (user email) carried by verified claims."""
    return claims.subject
