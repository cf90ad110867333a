from datetime import timedelta

import pytest
from jose import jwt

from deviflow.core.exceptions import InvalidToken, Unauthenticated
from deviflow.core.security import (
    TokenService, bearer_token, get_password_hash, verify_password
)
from deviflow.models.user import Role


@pytest.fixture()
def tokens():
    return TokenService("unit-test-secret", expires_minutes=60)


def test_password_hash_round_trip():
    hashed = get_password_hash("s3cret-password")
    assert hashed != "s3cret-password"
    assert verify_password("s3cret-password", hashed)
    assert not verify_password("wrong-password", hashed)


def test_password_hash_is_salted():
    assert get_password_hash("same-password") != get_password_hash("same-password")


def test_verify_password_rejects_malformed_hash():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_password_longer_than_72_bytes_is_truncated():
    hashed = get_password_hash("a" * 72 + "tail-one")
    assert verify_password("a" * 72 + "tail-two", hashed)


def test_issue_and_verify(tokens):
    token = tokens.issue(user_id=3, tenant_id=7, role=Role.admin, email="admin@acme.test")
    claims = tokens.verify(token)
    assert claims.user_id == 3
    assert claims.tenant_id == 7
    assert claims.role == Role.admin
    assert claims.email == "admin@acme.test"


def test_token_uses_camel_case_claims(tokens):
    token = tokens.issue(user_id=3, tenant_id=7, role=Role.user, email="user@acme.test")
    payload = jwt.decode(token, "unit-test-secret", algorithms=["HS256"])
    assert payload["userId"] == 3
    assert payload["tenantId"] == 7
    assert payload["role"] == "user"
    assert "exp" in payload and "iat" in payload


def test_token_signed_with_other_secret_is_rejected(tokens):
    other = TokenService("another-secret")
    token = other.issue(user_id=1, tenant_id=1, role=Role.user, email="a@b.test")
    with pytest.raises(InvalidToken):
        tokens.verify(token)


def test_expired_token_is_rejected(tokens):
    token = tokens.issue(
        user_id=1, tenant_id=1, role=Role.user, email="a@b.test",
        expires_delta=timedelta(seconds=-5),
    )
    with pytest.raises(InvalidToken):
        tokens.verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "not.a.token", "a.b"])
def test_malformed_token_is_rejected(tokens, token):
    with pytest.raises(InvalidToken):
        tokens.verify(token)


def test_token_missing_claims_is_rejected(tokens):
    token = jwt.encode({"userId": 1}, "unit-test-secret", algorithm="HS256")
    with pytest.raises(InvalidToken):
        tokens.verify(token)


def test_token_with_unknown_role_is_rejected(tokens):
    token = jwt.encode(
        {"userId": 1, "tenantId": 1, "role": "owner", "email": "a@b.test"},
        "unit-test-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidToken):
        tokens.verify(token)


def test_invalid_token_error_shape():
    err = InvalidToken()
    assert err.status_code == 403
    assert err.error == "INVALID_TOKEN"
    assert err.message == "Invalid or expired token"


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService("")


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Basic dXNlcjpwYXNz", "Token abc"])
def test_bearer_token_requires_bearer_scheme(header):
    with pytest.raises(Unauthenticated):
        bearer_token(header)


def test_bearer_token_extracts_token():
    assert bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
    assert bearer_token("bearer abc") == "abc"
