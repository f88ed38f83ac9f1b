from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from todoapp.core.config import settings
from todoapp.services.identity import current_user

oauth2_optional_scheme = OAuth2PasswordBearer(
    tokenUrl="/auth/token", auto_error=False
)


class LoginRequired(Exception):
    """Raised by view routes when no identity is present; handled as a redirect."""


def _extract_jwt(request: Request, token: Optional[str]) -> Optional[str]:
    return token or request.cookies.get(settings.access_cookie_name)


def get_current_user_optional(
    request: Request, token: Optional[str] = Depends(oauth2_optional_scheme)
) -> Optional[UUID]:
    """Lenient auth dependency; returns the owner id when valid, else None."""
    return current_user(_extract_jwt(request, token))


def require_view_user(
    user_id: Optional[UUID] = Depends(get_current_user_optional),
) -> Optional[UUID]:
    """Gate for HTML pages. None means the shared single-user list."""
    if settings.single_user:
        return None
    if user_id is None:
        raise LoginRequired()
    return user_id


def require_api_user(
    user_id: Optional[UUID] = Depends(get_current_user_optional),
) -> Optional[UUID]:
    """Gate for the JSON API; raises 401 when no/invalid token."""
    if settings.single_user:
        return None
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
