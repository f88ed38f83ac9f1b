# todoapp/routers/auth.py
from __future__ import annotations

from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel
from sqlmodel import Session

from todoapp.core.config import settings
from todoapp.core.templating import templates
from todoapp.core.tokens import create_access_token
from todoapp.db.session import get_session
from todoapp.dependencies.auth import get_current_user_optional
from todoapp.services.identity import AuthError, IdentityService, sign_out, start_session

auth_router = APIRouter(prefix="/auth", tags=["auth"])

AuthMode = Literal["signin", "signup"]


class AuthTokenModel(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user_id: str


def get_identity(db: Session = Depends(get_session)) -> IdentityService:
    return IdentityService(db)


def _auth_page(
    request: Request,
    mode: AuthMode,
    error: Optional[str] = None,
    email: Optional[str] = None,
    status_code: int = 200,
):
    return templates.TemplateResponse(
        request,
        "auth.html",
        {"mode": mode, "error": error, "email": email},
        status_code=status_code,
    )


@auth_router.get("")
def auth_page(request: Request, mode: AuthMode = "signin"):
    if settings.single_user:
        return RedirectResponse(url="/", status_code=303)
    return _auth_page(request, mode)


@auth_router.post("")
def authenticate(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    mode: AuthMode = Form("signin"),
    identity: IdentityService = Depends(get_identity),
):
    try:
        if mode == "signin":
            user = identity.sign_in(email, password)
        else:
            user = identity.sign_up(email, password)
    except AuthError as exc:
        return _auth_page(request, mode, error=str(exc), email=email, status_code=400)

    response = RedirectResponse(url="/", status_code=303)
    start_session(response, user)
    return response


@auth_router.post("/sign-out")
def sign_out_route(user_id: Optional[UUID] = Depends(get_current_user_optional)):
    response = RedirectResponse(url="/auth", status_code=303)
    sign_out(response, user_id)
    return response


@auth_router.post("/token", response_model=AuthTokenModel)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    identity: IdentityService = Depends(get_identity),
):
    """OAuth2 password flow for API clients (username = email)."""
    try:
        user = identity.sign_in(form_data.username, form_data.password)
    except AuthError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return AuthTokenModel(
        access_token=create_access_token(user.user_id),
        expires_in=60 * settings.access_token_expire_minutes,
        user_id=str(user.user_id),
    )
