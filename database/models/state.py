from sqlalchemy import Column, Integer, String, JSON, TIMESTAMP, UniqueConstraint, func

from .base import Base


class AppStateEntry(Base):
    """
    One persisted collection of the application snapshot (jobs, candidates,
    scores, settings or session) under a namespace.
    """
    __tablename__ = 'app_state'

    id = Column(Integer, primary_key=True, autoincrement=True)
    namespace = Column(String(64), nullable=False, index=True)
    key = Column(String(64), nullable=False)
    payload = Column(JSON)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('namespace', 'key', name='uq_app_state_namespace_key'),
    )
