from sqlalchemy import Column, Integer, Text, String, TIMESTAMP, func, Index

from .base import Base


class User(Base):
    """
    Recruiter account with its subscription tier and trial start.
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    role = Column(String(64), nullable=False, default="Recruiter")
    tier = Column(String(16), nullable=False, default="free")  # free|pro

    trial_started_at = Column(TIMESTAMP(timezone=True), nullable=False)
    last_login_at = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_users_username', 'username'),
    )
