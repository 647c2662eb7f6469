"""Persistence for the NavLearn data document.

The whole document is read on every request and rewritten on every
mutation. There is no locking: concurrent writers race and the last
write wins.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from navlearn.core.config import settings
from navlearn.models.records import StoreData

logger = logging.getLogger(__name__)


class DataRepository(ABC):
    """Read and write the persisted data document."""

    @abstractmethod
    def read(self) -> StoreData:
        """Load the whole document."""
        ...

    @abstractmethod
    def write(self, data: StoreData) -> None:
        """Replace the whole document."""
        ...


class JsonFileRepository(DataRepository):
    """Data document stored as one pretty-printed JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> StoreData:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return StoreData()

        try:
            return StoreData.model_validate_json(raw)
        except ValidationError as e:
            if all(err.get("type") == "json_invalid" for err in e.errors()):
                reason = "is not valid JSON"
            else:
                reason = f"does not match the schema: {e}"

            # Keep the records for manual repair; the next write starts a fresh file
            corrupt_path = self.path.with_suffix(self.path.suffix + ".corrupt")
            os.replace(self.path, corrupt_path)
            logger.error(f"Data file {self.path} {reason}, moved to {corrupt_path}")
            return StoreData()

    def write(self, data: StoreData) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(
            json.dumps(data.model_dump(mode="json"), indent=2),
            encoding="utf-8",
        )
        os.replace(tmp_path, self.path)


class InMemoryRepository(DataRepository):
    """Data document kept in memory, for tests and scripts."""

    def __init__(self, data: StoreData | None = None):
        self._raw = (data or StoreData()).model_dump(mode="json")

    def read(self) -> StoreData:
        return StoreData.model_validate(self._raw)

    def write(self, data: StoreData) -> None:
        self._raw = data.model_dump(mode="json")


_repository: DataRepository | None = None


def get_repository() -> DataRepository:
    """FastAPI dependency returning the configured repository."""
    global _repository

    if _repository is None:
        logger.info(f"Using data file: {settings.DATA_FILE}")
        _repository = JsonFileRepository(settings.DATA_FILE)

    return _repository
