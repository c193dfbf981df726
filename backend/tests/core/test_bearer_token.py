"""Bearer Token Parsing — exemption list and defensive header handling.

Tests cover:
    - Login, frontend, welcome and health paths are exempt; API resources are not
    - Only "Bearer <three-segment token>" yields a token
    - Placeholder values sent by broken clients degrade to "no token"
    - {"token": "..."} JSON bodies are unwrapped
"""

import pytest

from task_manager.core.bearer_token import extract_bearer_token, is_exempt

JWT_LIKE = "aaa.bbb.ccc"


@pytest.mark.parametrize("path", [
    "/api/login", "/", "/index.html", "/favicon.ico", "/welcome",
    "/assets/app.js", "/assets/img/logo.svg", "/api/health", "/api/health/ready",
])
def test_exempt_paths(path):
    assert is_exempt(path)


@pytest.mark.parametrize("path", [
    "/api/users", "/api/tasks", "/api/labels/1", "/api/task_statuses",
    "/api/loginx", "/assets", "/api/healthz",
])
def test_protected_paths_are_not_exempt(path):
    assert not is_exempt(path)


def test_well_formed_bearer_header_yields_token():
    assert extract_bearer_token(f"Bearer {JWT_LIKE}") == JWT_LIKE


def test_surrounding_whitespace_is_trimmed():
    assert extract_bearer_token(f"Bearer   {JWT_LIKE}  ") == JWT_LIKE


@pytest.mark.parametrize("header", [
    None, "", JWT_LIKE, f"Basic {JWT_LIKE}", f"bearer {JWT_LIKE}",
])
def test_missing_or_non_bearer_header_yields_none(header):
    assert extract_bearer_token(header) is None


@pytest.mark.parametrize("value", [
    "", "   ", "null", "undefined", "[object Object]",
])
def test_placeholder_values_yield_none(value):
    assert extract_bearer_token(f"Bearer {value}") is None


@pytest.mark.parametrize("value", [
    "abc", "a.b", "a.b.c.d", "a..c", ".b.c", "a.b.",
])
def test_values_without_three_segments_yield_none(value):
    assert extract_bearer_token(f"Bearer {value}") is None


def test_json_wrapped_token_is_unwrapped():
    assert extract_bearer_token(f'Bearer {{"token": "{JWT_LIKE}"}}') == JWT_LIKE


@pytest.mark.parametrize("value", [
    '{"token": 42}', '{"jwt": "a.b.c"}', "{not json", '{"token": "abc"}',
])
def test_unusable_json_yields_none(value):
    assert extract_bearer_token(f"Bearer {value}") is None
