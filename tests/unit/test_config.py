import jwt
import pytest
from pydantic import ValidationError

from networknote.auth.overrides import OVERRIDE_ALGORITHM, OVERRIDE_ISSUER, decode_override_token
from networknote.config import DEV_OVERRIDE_TOKEN_SECRET, Settings, settings
from networknote.errors import AuthFailure


def test_override_secret_required_outside_development():
    with pytest.raises(ValidationError, match="OVERRIDE_TOKEN_SECRET"):
        Settings(_env_file=None, environment="production", OVERRIDE_TOKEN_SECRET=None)


def test_configured_override_secret_is_kept():
    configured = Settings(_env_file=None, environment="production", OVERRIDE_TOKEN_SECRET="s3cret")
    assert configured.OVERRIDE_TOKEN_SECRET == "s3cret"


def test_development_gets_local_secret():
    local = Settings(_env_file=None, environment="development", OVERRIDE_TOKEN_SECRET=None)
    assert local.OVERRIDE_TOKEN_SECRET == DEV_OVERRIDE_TOKEN_SECRET


def test_token_signed_with_another_secret_is_rejected(monkeypatch):
    monkeypatch.setattr(settings, "OVERRIDE_TOKEN_SECRET", "deployment-secret")
    forged = jwt.encode(
        {"iss": OVERRIDE_ISSUER, "override": "admin", "email": "x@example.com"},
        "networknote-override-secret-change-me",
        algorithm=OVERRIDE_ALGORITHM,
    )

    with pytest.raises(AuthFailure):
        decode_override_token(forged)
