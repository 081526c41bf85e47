#!/usr/bin/env python3
"""
Auth Service - recruiter accounts, the free trial and idle sign-out.

Passwords are stored as salted PBKDF2-SHA256 hashes in the ``users`` table.
Free-tier accounts get a fixed-length trial counted in whole elapsed days;
pro accounts are never gated.
"""

import hashlib
import hmac
import logging
import math
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import sessionmaker

from core.config_loader import SessionConfig
from core.exceptions import AuthenticationError, NotFoundError, TrialExpiredError, ValidationError
from core.models import Principal, TrialInfo
from core.utils import utc_now
from database.uow import user_uow

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 200_000
TIER_PRO = "pro"


def hash_password(password: str, salt: Optional[str] = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS)
    return f"pbkdf2_sha256${PBKDF2_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        _, iterations, salt, expected = stored.split("$")
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def compute_trial(started_at: datetime, now: datetime, trial_days: int) -> TrialInfo:
    """Whole-day trial arithmetic: expired once ``trial_days`` full days have elapsed."""
    started_at = _aware(started_at)
    elapsed_days = math.floor((_aware(now) - started_at).total_seconds() / 86400)
    return TrialInfo(
        start_date=started_at.isoformat(),
        is_expired=elapsed_days >= trial_days,
        days_remaining=max(0, trial_days - elapsed_days),
    )


def _principal(user, now: datetime) -> Principal:
    return Principal(
        username=user.username,
        name=user.name,
        role=user.role,
        tier=user.tier,
        last_activity_at=now.isoformat(),
    )


class AuthService:
    def __init__(self, session_factory: sessionmaker, config: Optional[SessionConfig] = None):
        self.session_factory = session_factory
        self.config = config or SessionConfig()

    def sign_up(self, username: str, password: str, name: str = "", now: Optional[datetime] = None) -> Principal:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Username and password are required")
        now = now or utc_now()

        with user_uow(self.session_factory) as repo:
            if repo.get_by_username(username):
                raise AuthenticationError("Username already exists.")
            user = repo.create(username, hash_password(password), (name or "").strip() or username, trial_started_at=now)
            return _principal(user, now)

    def sign_in(self, username: str, password: str, now: Optional[datetime] = None) -> Principal:
        now = now or utc_now()
        with user_uow(self.session_factory) as repo:
            user = repo.get_by_username((username or "").strip())
            if not user or not verify_password(password or "", user.password_hash):
                logger.warning(f"Failed sign-in for {username!r}")
                raise AuthenticationError("Invalid credentials.")
            repo.touch_login(user, now)
            return _principal(user, now)

    def reset_password(self, username: str, new_password: str) -> None:
        if not new_password:
            raise ValidationError("A new password is required")
        with user_uow(self.session_factory) as repo:
            user = repo.get_by_username((username or "").strip())
            if not user:
                raise NotFoundError("User", username)
            repo.set_password(user, hash_password(new_password))
        logger.info(f"Password reset for {username}")

    def upgrade(self, username: str) -> Principal:
        now = utc_now()
        with user_uow(self.session_factory) as repo:
            user = repo.get_by_username(username)
            if not user:
                raise NotFoundError("User", username)
            repo.set_tier(user, TIER_PRO)
            logger.info(f"Upgraded {username} to {TIER_PRO}")
            return _principal(user, now)

    def trial_info(self, username: str, now: Optional[datetime] = None) -> TrialInfo:
        with user_uow(self.session_factory) as repo:
            user = repo.get_by_username(username)
            if not user:
                raise NotFoundError("User", username)
            started_at = user.trial_started_at
        return compute_trial(started_at, now or utc_now(), self.config.trial_days)

    def is_idle(self, principal: Principal, now: Optional[datetime] = None) -> bool:
        if not principal.last_activity_at:
            return False
        last = _aware(datetime.fromisoformat(principal.last_activity_at))
        return _aware(now or utc_now()) - last > timedelta(minutes=self.config.idle_timeout_minutes)

    def require_active(self, principal: Principal, now: Optional[datetime] = None) -> None:
        """Gate oracle-backed operations on the trial for free-tier accounts."""
        if principal.tier == TIER_PRO:
            return
        if self.trial_info(principal.username, now).is_expired:
            raise TrialExpiredError(
                "Your free trial has expired. Upgrade to Pro to keep using AI screening."
            )
