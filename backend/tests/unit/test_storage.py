"""Unit tests for the JSON data document repositories."""

import json

import pytest

from navlearn.core.storage import DataRepository, InMemoryRepository, JsonFileRepository
from navlearn.models.knowledge import KnowledgeEntry
from navlearn.models.records import ModuleContentEntry, StoreData


@pytest.mark.unit
class TestJsonFileRepository:
    """Test whole-document persistence."""

    def test_missing_file_gives_defaults(self, tmp_path):
        data = JsonFileRepository(tmp_path / "data.json").read()

        assert data.users == {}
        assert data.knowledge == []
        assert data.module_content == {"cranial": [], "spine": [], "ent": []}

    def test_corrupt_file_gives_defaults(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")

        assert JsonFileRepository(path).read() == StoreData()
        assert path.with_suffix(".json.corrupt").read_text(encoding="utf-8") == "{not json"

    def test_schema_mismatch_keeps_existing_records(self, tmp_path):
        path = tmp_path / "data.json"
        user = {
            "email": "a@example.com",
            "first_name": "A",
            "last_name": "B",
            "serial": "NAV-1",
            "hospital": "General",
            "password_hash": "salt$hash",
        }
        knowledge = {"title": "Empty", "original_name": "e.txt", "mime_type": "text/plain", "size": 0, "text": ""}
        original = json.dumps({"users": {"a@example.com": user}, "knowledge": [knowledge]})
        path.write_text(original, encoding="utf-8")
        repository = JsonFileRepository(path)

        repository.write(repository.read())

        corrupt_path = path.with_suffix(".json.corrupt")
        assert json.loads(corrupt_path.read_text(encoding="utf-8"))["users"] == {"a@example.com": user}
        assert repository.read() == StoreData()

    def test_write_then_read(self, tmp_path):
        path = tmp_path / "nested" / "data.json"
        repository = JsonFileRepository(path)

        data = repository.read()
        data.sessions["abc"] = "trainee@example.com"
        data.progress["trainee@example.com"] = {"cranial": 40}
        data.module_content["spine"].append(ModuleContentEntry(
            title="Pedicle screws", type="pdf", filename="1-abc.pdf", original_name="screws.pdf", size=10,
        ))
        data.knowledge.append(KnowledgeEntry(
            title="Anatomy", original_name="a.txt", mime_type="text/plain", size=5, text="Bone.",
        ))
        repository.write(data)

        reread = JsonFileRepository(path).read()
        assert reread == data
        assert not path.with_suffix(".json.tmp").exists()

    def test_file_is_pretty_printed_json(self, tmp_path):
        path = tmp_path / "data.json"
        JsonFileRepository(path).write(StoreData())

        raw = path.read_text(encoding="utf-8")
        assert "\n  " in raw
        assert set(json.loads(raw)) == {
            "users", "sessions", "progress", "admins", "admin_sessions", "module_content", "knowledge",
        }


@pytest.mark.unit
class TestInMemoryRepository:
    """Test the in-memory repository used by tests."""

    def test_reads_are_independent_copies(self):
        repository = InMemoryRepository()

        data = repository.read()
        data.sessions["abc"] = "someone@example.com"

        assert repository.read().sessions == {}

    def test_write_is_visible(self):
        repository = InMemoryRepository()
        data = repository.read()
        data.sessions["abc"] = "someone@example.com"
        repository.write(data)

        assert repository.read().sessions == {"abc": "someone@example.com"}


@pytest.mark.unit
def test_repository_interface_is_abstract():
    with pytest.raises(TypeError):
        DataRepository()
