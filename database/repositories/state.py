import logging
from typing import Any, Dict, Optional

from sqlalchemy import select, delete

from database.models import AppStateEntry
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class StateRepository(BaseRepository):
    def load_namespace(self, namespace: str) -> Dict[str, Any]:
        stmt = select(AppStateEntry).where(AppStateEntry.namespace == namespace)
        return {entry.key: entry.payload for entry in self.db.execute(stmt).scalars()}

    def get(self, namespace: str, key: str) -> Optional[AppStateEntry]:
        stmt = select(AppStateEntry).where(
            AppStateEntry.namespace == namespace,
            AppStateEntry.key == key,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def save(self, namespace: str, key: str, payload: Any) -> AppStateEntry:
        """Replace the stored payload for (namespace, key) wholesale."""
        entry = self.get(namespace, key)
        if entry:
            entry.payload = payload
        else:
            entry = AppStateEntry(namespace=namespace, key=key, payload=payload)
            self.db.add(entry)
        self.db.flush()
        return entry

    def delete(self, namespace: str, key: str) -> bool:
        result = self.db.execute(
            delete(AppStateEntry).where(
                AppStateEntry.namespace == namespace,
                AppStateEntry.key == key,
            )
        )
        return result.rowcount > 0
