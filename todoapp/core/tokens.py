# todoapp/core/tokens.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from uuid import UUID

from fastapi import Response
from jose import JWTError, jwt

from todoapp.core.config import settings


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def create_access_token(sub: UUID, expires_delta: timedelta | None = None) -> str:
    """
    Issues a JWT access token for the given user id.
    """
    expire = _utcnow() + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload: Dict[str, Any] = {
        "sub": str(sub),
        "typ": "access",
        "iat": int(_utcnow().timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Returns the payload of a valid access token.
    Raises JWTError on bad signature, expiry or wrong token type.
    """
    payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    if payload.get("typ") != "access":
        raise JWTError("Invalid token type")
    return payload


def decode_access_token(token: str):
    """verify_access_token wrapper that returns None instead of raising."""
    try:
        return verify_access_token(token)
    except JWTError:
        return None


def set_access_cookie(response: Response, token: str) -> None:
    # COOKIE_SECURE=false for plain http in development
    response.set_cookie(
        key=settings.access_cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=60 * settings.access_token_expire_minutes,
        path="/",
    )


def clear_access_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.access_cookie_name, path="/")
