#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import logging

from fastapi import Depends, HTTPException, Request

from core.app_context import AppContext
from core.models import Principal
from core.screening_service import ScreeningService
from core.utils import utc_now

logger = logging.getLogger(__name__)

AUTH_REQUIRED = "Not authenticated. Sign in via /api/auth/login or create an account via /api/auth/signup."


def get_context(request: Request) -> AppContext:
    """
    FastAPI dependency returning the application context built at startup.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(ctx: AppContext = Depends(get_context)):
            ...
    """
    ctx = getattr(request.app.state, "context", None)
    if ctx is None:
        raise HTTPException(status_code=503, detail="Application is still starting")
    return ctx


def get_current_principal(ctx: AppContext = Depends(get_context)) -> Principal:
    """
    Require a signed-in principal and record activity.

    A principal idle for longer than the configured timeout is signed out
    and the request is refused.
    """
    principal = ctx.state.principal
    if principal is None:
        raise HTTPException(status_code=401, detail=AUTH_REQUIRED)

    now = utc_now()
    if ctx.auth.is_idle(principal, now):
        logger.info(f"Signing out {principal.username} after inactivity")
        ctx.state.clear_session()
        raise HTTPException(status_code=401, detail="Session expired due to inactivity. Please sign in again.")

    principal.last_activity_at = now.isoformat()
    ctx.state.set_principal(principal)
    return principal


def get_screening(
    ctx: AppContext = Depends(get_context),
    principal: Principal = Depends(get_current_principal),
) -> ScreeningService:
    """Controller for routes that only read or edit local state."""
    return ctx.screening


def get_active_screening(
    ctx: AppContext = Depends(get_context),
    principal: Principal = Depends(get_current_principal),
) -> ScreeningService:
    """Controller for oracle-backed routes; refuses expired free trials (402)."""
    ctx.auth.require_active(principal)
    return ctx.screening
