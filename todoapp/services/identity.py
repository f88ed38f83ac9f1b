# todoapp/services/identity.py
from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

import bcrypt
from fastapi import Response
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from todoapp.core.tokens import (
    clear_access_cookie,
    create_access_token,
    decode_access_token,
    set_access_cookie,
)
from todoapp.models.user import User
from todoapp.services.store_registry import registry

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt input limit


class AuthError(Exception):
    """Sign-in / sign-up failure; the message is shown to the user as-is."""


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


class IdentityService:
    def __init__(self, db: Session):
        self.db = db

    def _by_email(self, email: str) -> Optional[User]:
        return self.db.exec(select(User).where(User.email == email)).first()

    def sign_up(self, email: Optional[str], password: Optional[str]) -> User:
        email = _normalize_email(email)
        password = password or ""
        if not email or not password:
            raise AuthError("Email and password are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise AuthError(f"Password should be at most {MAX_PASSWORD_BYTES} bytes")
        if self._by_email(email) is not None:
            raise AuthError("User already registered")

        user = User(email=email, password_hash=hash_password(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # concurrent sign-up with the same email
            self.db.rollback()
            raise AuthError("User already registered")
        self.db.refresh(user)
        log.info("user signed up: %s", user.user_id)
        return user

    def sign_in(self, email: Optional[str], password: Optional[str]) -> User:
        user = self._by_email(_normalize_email(email))
        if user is None or not verify_password(password or "", user.password_hash):
            raise AuthError("Invalid login credentials")
        return user


def current_user(token: Optional[str]) -> Optional[UUID]:
    """Owner id carried by a valid access token, else None."""
    if not token:
        return None
    payload = decode_access_token(token)
    if payload is None or "sub" not in payload:
        return None
    try:
        return UUID(payload["sub"])
    except ValueError:
        return None


def start_session(response: Response, user: User) -> str:
    token = create_access_token(user.user_id)
    set_access_cookie(response, token)
    return token


def sign_out(response: Response, owner_id: Optional[UUID]) -> None:
    """Forget the owner's local mirror and drop the session cookie."""
    if owner_id is not None:
        registry.discard(owner_id)
    clear_access_cookie(response)
