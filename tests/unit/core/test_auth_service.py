"""
Unit tests for recruiter accounts, trial arithmetic and idle sign-out.
"""
from datetime import datetime, timedelta, timezone

import pytest

from core.auth_service import AuthService, compute_trial, hash_password, verify_password
from core.config_loader import SessionConfig
from core.exceptions import AuthenticationError, NotFoundError, TrialExpiredError, ValidationError
from core.models import Principal

START = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


class TestPasswords:
    def test_hash_verifies(self):
        stored = hash_password("hunter2")
        assert stored.startswith("pbkdf2_sha256$")
        assert verify_password("hunter2", stored)
        assert not verify_password("hunter3", stored)

    def test_salts_differ(self):
        assert hash_password("same") != hash_password("same")

    def test_garbage_hash_never_verifies(self):
        assert not verify_password("x", "not-a-hash")


class TestComputeTrial:
    @pytest.mark.parametrize("elapsed,expired,remaining", [
        (timedelta(0), False, 7),
        (timedelta(days=3, hours=23), False, 4),
        (timedelta(days=6, hours=23, minutes=59), False, 1),
        (timedelta(days=7), True, 0),
        (timedelta(days=30), True, 0),
    ])
    def test_whole_day_arithmetic(self, elapsed, expired, remaining):
        trial = compute_trial(START, START + elapsed, trial_days=7)

        assert trial.is_expired is expired
        assert trial.days_remaining == remaining

    def test_naive_datetimes_are_utc(self):
        trial = compute_trial(START.replace(tzinfo=None), START + timedelta(days=2), trial_days=7)
        assert trial.days_remaining == 5
        assert trial.start_date == START.isoformat()


@pytest.mark.db
class TestAuthService:
    @pytest.fixture
    def auth(self, session_factory):
        return AuthService(session_factory, SessionConfig(trial_days=7, idle_timeout_minutes=15))

    def test_sign_up_then_sign_in(self, auth):
        created = auth.sign_up("sam", "secret", name="Sam Recruiter", now=START)
        signed_in = auth.sign_in("sam", "secret", now=START + timedelta(hours=1))

        assert created.name == "Sam Recruiter"
        assert created.tier == "free"
        assert signed_in.username == "sam"
        assert signed_in.last_activity_at == (START + timedelta(hours=1)).isoformat()

    def test_name_defaults_to_username(self, auth):
        assert auth.sign_up("sam", "secret").name == "sam"

    def test_duplicate_username_rejected(self, auth):
        auth.sign_up("sam", "secret")
        with pytest.raises(AuthenticationError, match="already exists"):
            auth.sign_up("sam", "other")

    @pytest.mark.parametrize("username,password", [("", "secret"), ("sam", ""), ("   ", "secret")])
    def test_missing_credentials_rejected(self, auth, username, password):
        with pytest.raises(ValidationError):
            auth.sign_up(username, password)

    def test_bad_credentials(self, auth):
        auth.sign_up("sam", "secret")
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            auth.sign_in("sam", "wrong")
        with pytest.raises(AuthenticationError):
            auth.sign_in("nobody", "secret")

    def test_reset_password(self, auth):
        auth.sign_up("sam", "secret")
        auth.reset_password("sam", "new-secret")

        assert auth.sign_in("sam", "new-secret").username == "sam"
        with pytest.raises(AuthenticationError):
            auth.sign_in("sam", "secret")

    def test_reset_unknown_user(self, auth):
        with pytest.raises(NotFoundError):
            auth.reset_password("nobody", "x")

    def test_trial_info_from_stored_start(self, auth):
        auth.sign_up("sam", "secret", now=START)

        trial = auth.trial_info("sam", now=START + timedelta(days=2, hours=5))

        assert trial.days_remaining == 5
        assert trial.is_expired is False

    def test_expired_trial_gates_free_tier(self, auth):
        principal = auth.sign_up("sam", "secret", now=START)

        auth.require_active(principal, now=START + timedelta(days=6))
        with pytest.raises(TrialExpiredError):
            auth.require_active(principal, now=START + timedelta(days=7))

    def test_pro_tier_is_never_gated(self, auth):
        auth.sign_up("sam", "secret", now=START)
        principal = auth.upgrade("sam")

        assert principal.tier == "pro"
        auth.require_active(principal, now=START + timedelta(days=365))

    def test_idle_timeout(self, auth):
        principal = Principal(username="sam", name="Sam", last_activity_at=START.isoformat())

        assert not auth.is_idle(principal, now=START + timedelta(minutes=15))
        assert auth.is_idle(principal, now=START + timedelta(minutes=15, seconds=1))
        assert not auth.is_idle(Principal(username="sam", name="Sam"))
