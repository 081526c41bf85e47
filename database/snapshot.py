"""SQL-backed snapshot store for AppState."""

import logging
from typing import Any, Dict

from sqlalchemy.orm import sessionmaker

from database.uow import state_uow

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Each key of the snapshot is one row; saving rewrites that row wholesale."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def load(self, namespace: str) -> Dict[str, Any]:
        with state_uow(self.session_factory) as repo:
            return repo.load_namespace(namespace)

    def save(self, namespace: str, key: str, payload: Any) -> None:
        with state_uow(self.session_factory) as repo:
            repo.save(namespace, key, payload)
        logger.debug(f"Persisted {namespace}/{key}")

    def delete(self, namespace: str, key: str) -> None:
        with state_uow(self.session_factory) as repo:
            repo.delete(namespace, key)
