"""Bearer Token Parsing — decides which requests are authenticated and what the token is.

Invariants:
    - is_exempt() is true only for login, frontend assets, welcome and health paths
    - extract_bearer_token() never raises: anything unusable is treated as "no token"
    - A usable token has exactly three non-empty dot-separated segments

Design Decisions:
    - Defensive parsing lives here, not in the gate: browser clients have been seen
      sending "null", "undefined", "[object Object]" or {"token": "..."} JSON, and all
      of these must degrade to anonymous rather than to a 500
    - Exact paths in a frozenset, prefixes in a tuple: the exemption list is small
      and explicit (no pattern-matching library)
"""

import json
import re

BEARER_PREFIX = "Bearer "

_EXEMPT_PATHS = frozenset({
    "/api/login",
    "/",
    "/index.html",
    "/favicon.ico",
    "/welcome",
    "/api/health",
})
_EXEMPT_PREFIXES = ("/assets/", "/api/health/")

_PLACEHOLDER_VALUES = frozenset({"null", "undefined", "[object Object]"})
_JWT_SHAPE = re.compile(r"^[^.\s]+\.[^.\s]+\.[^.\s]+$")


def is_exempt(path: str) -> bool:
    """True when the request skips token processing entirely."""
    if path in _EXEMPT_PATHS:
        return True
    return path.startswith(_EXEMPT_PREFIXES)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Pull a well-formed JWT out of an Authorization header value, or None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    raw = authorization[len(BEARER_PREFIX):].strip()
    if not raw or raw in _PLACEHOLDER_VALUES:
        return None
    if raw.startswith("{"):
        raw = _unwrap_json_token(raw)
        if raw is None:
            return None
    if not _JWT_SHAPE.match(raw):
        return None
    return raw


def _unwrap_json_token(raw: str) -> str | None:
    """Accept {"token": "<jwt>"} sent by clients that serialized the login response."""
    try:
        node = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(node, dict):
        return None
    token = node.get("token")
    return token.strip() if isinstance(token, str) else None
