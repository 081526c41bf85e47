import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select

from database.models import User
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        return self.db.execute(stmt).scalar_one_or_none()

    def create(self, username: str, password_hash: str, name: str, trial_started_at: datetime) -> User:
        user = User(
            username=username,
            password_hash=password_hash,
            name=name,
            role="Recruiter",
            tier="free",
            trial_started_at=trial_started_at,
        )
        self.db.add(user)
        self.db.flush()
        logger.info(f"Created user {username}")
        return user

    def set_password(self, user: User, password_hash: str) -> None:
        user.password_hash = password_hash
        self.db.flush()

    def set_tier(self, user: User, tier: str) -> None:
        user.tier = tier
        self.db.flush()

    def touch_login(self, user: User, at: datetime) -> None:
        user.last_login_at = at
        self.db.flush()
