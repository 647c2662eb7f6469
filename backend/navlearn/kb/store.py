"""Ordered knowledge store on top of the data repository."""
import logging

from navlearn.core.storage import DataRepository
from navlearn.models.knowledge import KnowledgeEntry

logger = logging.getLogger(__name__)


class KnowledgeStore:
    """Knowledge entries in upload order.

    Entries are only appended or removed by id; lookups scan the list.
    """

    def __init__(self, repository: DataRepository):
        self.repository = repository

    def list_entries(self) -> list[KnowledgeEntry]:
        return self.repository.read().knowledge

    def get(self, entry_id: str) -> KnowledgeEntry | None:
        return next((e for e in self.list_entries() if e.id == entry_id), None)

    def add(self, entry: KnowledgeEntry) -> KnowledgeEntry:
        data = self.repository.read()
        data.knowledge.append(entry)
        self.repository.write(data)
        logger.info(f"Stored knowledge entry {entry.id} ({len(data.knowledge)} total)")
        return entry

    def remove(self, entry_id: str) -> KnowledgeEntry | None:
        """Remove an entry by id; returns it, or None when unknown."""
        data = self.repository.read()
        for i, entry in enumerate(data.knowledge):
            if entry.id == entry_id:
                del data.knowledge[i]
                self.repository.write(data)
                logger.info(f"Removed knowledge entry {entry_id}")
                return entry
        return None
