from __future__ import annotations

import pytest
from fastapi import Response
from sqlmodel import Session

from todoapp.core.tokens import create_access_token
from todoapp.services.identity import (
    AuthError,
    IdentityService,
    current_user,
    sign_out,
    start_session,
)
from todoapp.services.store_registry import registry

from .fakes import FakeTodoTable


@pytest.fixture
def identity(sqlite_engine):
    with Session(sqlite_engine) as s:
        yield IdentityService(s)


def test_sign_up_then_sign_in(identity):
    created = identity.sign_up("  Ada@Example.com ", "secret-pw")

    assert created.email == "ada@example.com"
    assert created.password_hash != "secret-pw"
    assert identity.sign_in("ada@example.com", "secret-pw").user_id == created.user_id


def test_duplicate_sign_up_is_rejected(identity):
    identity.sign_up("ada@example.com", "secret-pw")

    with pytest.raises(AuthError, match="User already registered"):
        identity.sign_up("ADA@example.com", "another-pw")


@pytest.mark.parametrize(
    ("email", "password", "message"),
    [
        ("", "secret-pw", "Email and password are required"),
        ("ada@example.com", "", "Email and password are required"),
        ("ada@example.com", "short", "at least 6 characters"),
        ("ada@example.com", "x" * 73, "at most 72 bytes"),
    ],
)
def test_sign_up_validation(identity, email, password, message):
    with pytest.raises(AuthError, match=message):
        identity.sign_up(email, password)


@pytest.mark.parametrize(("email", "password"), [("ada@example.com", "wrong-pw"), ("nobody@example.com", "secret-pw")])
def test_sign_in_failures_share_one_message(identity, email, password):
    identity.sign_up("ada@example.com", "secret-pw")

    with pytest.raises(AuthError, match="Invalid login credentials"):
        identity.sign_in(email, password)


def test_current_user_round_trips_token(identity):
    user = identity.sign_up("ada@example.com", "secret-pw")
    response = Response()

    token = start_session(response, user)

    assert current_user(token) == user.user_id
    assert "access_token=" in response.headers["set-cookie"]


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_current_user_rejects_missing_or_bad_tokens(token):
    assert current_user(token) is None


def test_current_user_rejects_non_uuid_subject():
    from jose import jwt

    from todoapp.core.config import settings

    token = jwt.encode({"sub": "admin", "typ": "access"}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    assert current_user(token) is None


def test_sign_out_discards_store_and_cookie(identity):
    user = identity.sign_up("ada@example.com", "secret-pw")
    registry.clear()
    registry.get(user.user_id, FakeTodoTable())
    response = Response()

    sign_out(response, user.user_id)

    assert len(registry) == 0
    assert 'access_token=""' in response.headers["set-cookie"]
    assert current_user(create_access_token(user.user_id)) == user.user_id
