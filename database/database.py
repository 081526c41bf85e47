import contextlib
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from database.models import Base

logger = logging.getLogger(__name__)


def make_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Web handlers run in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


def make_session_factory(database_url: str) -> sessionmaker:
    engine = make_engine(database_url)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(session_factory: sessionmaker) -> None:
    """Create all tables that don't exist yet."""
    engine = session_factory.kw["bind"]
    Base.metadata.create_all(engine)
    logger.info(f"Database schema ready at {engine.url.render_as_string(hide_password=True)}")


@contextlib.contextmanager
def db_session_scope(session_factory: sessionmaker):
    """Provide a transactional scope around a series of operations."""
    session: Session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
