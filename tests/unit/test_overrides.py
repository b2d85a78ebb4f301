import pytest

from networknote.auth.overrides import (
    decode_override_token,
    is_override_token,
    issue_override_token,
    match_override,
)
from networknote.auth.verify import resolve_auth_mode
from networknote.errors import AuthFailure
from networknote.models.domain.session_domain import AdminOverride, ManagerOverride, Unauthenticated


def test_match_override_credentials():
    assert match_override("admin@example.com", "AdminPass123!") == AdminOverride(
        email="admin@example.com"
    )
    assert isinstance(match_override("manager@example.com", "ManagerPass123!"), ManagerOverride)
    assert match_override("admin@example.com", "nope") is None


def test_override_token_round_trip():
    token = issue_override_token(ManagerOverride(email="manager@example.com"))
    assert is_override_token(token)
    assert decode_override_token(token) == ManagerOverride(email="manager@example.com")
    assert resolve_auth_mode(token) == ManagerOverride(email="manager@example.com")


def test_tampered_override_token_rejected():
    token = issue_override_token(AdminOverride(email="admin@example.com"))
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")])
    with pytest.raises(AuthFailure):
        decode_override_token(tampered)


def test_no_token_is_unauthenticated():
    assert resolve_auth_mode(None) == Unauthenticated()
