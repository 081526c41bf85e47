#!/usr/bin/env python3
"""
Auth endpoints - accounts, sessions and the free trial.
"""

import logging
from fastapi import APIRouter, Depends

from core.app_context import AppContext
from core.models import Principal

from ..dependencies import get_context, get_current_principal
from ..models.requests import LoginRequest, ResetPasswordRequest, SignUpRequest
from ..models.responses import AuthResponse
from ..utils import principal_response, trial_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _signed_in(ctx: AppContext, principal: Principal, message: str) -> AuthResponse:
    ctx.state.set_principal(principal)
    return AuthResponse(
        user=principal_response(principal),
        trial=trial_response(ctx.auth.trial_info(principal.username)),
        message=message,
    )


@router.post("/signup", response_model=AuthResponse)
def sign_up(body: SignUpRequest, ctx: AppContext = Depends(get_context)):
    """Create a free-tier account, start its trial and sign it in."""
    principal = ctx.auth.sign_up(body.username, body.password, body.name)
    return _signed_in(ctx, principal, "Account created")


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, ctx: AppContext = Depends(get_context)):
    principal = ctx.auth.sign_in(body.username, body.password)
    return _signed_in(ctx, principal, "Signed in")


@router.post("/logout", response_model=AuthResponse)
def logout(ctx: AppContext = Depends(get_context)):
    """Drop the session; jobs, candidates and scores are kept."""
    ctx.state.clear_session()
    return AuthResponse(message="Signed out")


@router.post("/reset-password", response_model=AuthResponse)
def reset_password(body: ResetPasswordRequest, ctx: AppContext = Depends(get_context)):
    ctx.auth.reset_password(body.username, body.new_password)
    return AuthResponse(message="Password updated successfully. Please login.")


@router.post("/upgrade", response_model=AuthResponse)
def upgrade(
    ctx: AppContext = Depends(get_context),
    principal: Principal = Depends(get_current_principal),
):
    upgraded = ctx.auth.upgrade(principal.username)
    return _signed_in(ctx, upgraded, "Upgraded to Pro")


@router.get("/me", response_model=AuthResponse)
def me(
    ctx: AppContext = Depends(get_context),
    principal: Principal = Depends(get_current_principal),
):
    return AuthResponse(
        user=principal_response(principal),
        trial=trial_response(ctx.auth.trial_info(principal.username)),
    )
