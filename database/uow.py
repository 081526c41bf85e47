import contextlib
import logging

from sqlalchemy.orm import sessionmaker

from database.repositories import StateRepository, UserRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _uow(session_factory: sessionmaker, repo_cls):
    session = session_factory()
    try:
        yield repo_cls(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def state_uow(session_factory: sessionmaker):
    """Per-unit-of-work transaction scope yielding a StateRepository.

    Commits on success, rolls back on exception, always closes.

    Usage:
        with state_uow(factory) as repo:
            repo.save("smartscreen", "jobs", [...])
    """
    return _uow(session_factory, StateRepository)


def user_uow(session_factory: sessionmaker):
    """Same as state_uow, yielding a UserRepository."""
    return _uow(session_factory, UserRepository)
