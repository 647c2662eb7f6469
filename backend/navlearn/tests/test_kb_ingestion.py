"""Tests for the knowledge store and document ingestion."""
import pytest

from navlearn.core.storage import InMemoryRepository
from navlearn.kb.errors import (
    EmptyDocumentError,
    ExtractionError,
    KnowledgeEntryNotFoundError,
    UnsupportedFileTypeError,
)
from navlearn.kb.ingestion import delete_document, ingest_document
from navlearn.kb.matcher import answer
from navlearn.kb.store import KnowledgeStore
from navlearn.models.knowledge import KnowledgeEntry


@pytest.fixture
def store() -> KnowledgeStore:
    return KnowledgeStore(InMemoryRepository())


def make_entry(title: str, text: str = "Some text.") -> KnowledgeEntry:
    return KnowledgeEntry(title=title, original_name="a.txt", mime_type="text/plain", size=1, text=text)


class TestKnowledgeStore:
    """Test ordered storage of knowledge entries."""

    def test_starts_empty(self, store):
        assert store.list_entries() == []

    def test_add_keeps_insertion_order(self, store):
        for title in ["One", "Two", "Three"]:
            store.add(make_entry(title))

        assert [e.title for e in store.list_entries()] == ["One", "Two", "Three"]

    def test_get(self, store):
        entry = store.add(make_entry("One"))

        assert store.get(entry.id).title == "One"
        assert store.get("unknown") is None

    def test_remove(self, store):
        first = store.add(make_entry("One"))
        second = store.add(make_entry("Two"))

        removed = store.remove(first.id)

        assert removed.id == first.id
        assert [e.id for e in store.list_entries()] == [second.id]

    def test_remove_unknown(self, store):
        store.add(make_entry("One"))
        assert store.remove("unknown") is None
        assert len(store.list_entries()) == 1

    def test_entries_require_text(self):
        with pytest.raises(ValueError):
            make_entry("Empty", text="")


class TestIngestDocument:
    """Test ingestion of uploaded files."""

    def test_ingest_text_file(self, store, tmp_path):
        path = tmp_path / "1700000000000-abc123xyz.txt"
        path.write_text("  The skull protects the brain. The spine supports the body.\n", encoding="utf-8")

        entry = ingest_document(
            store,
            path=path,
            title="Anatomy",
            original_name="anatomy.txt",
            mime_type="text/plain",
            size=path.stat().st_size,
        )

        assert entry.text == "The skull protects the brain. The spine supports the body."
        assert entry.filename == path.name
        assert path.exists()
        assert [e.id for e in store.list_entries()] == [entry.id]

        result = answer("What protects the brain", store.list_entries())
        assert result.sentence == "The skull protects the brain."
        assert result.source_title == "Anatomy"

    def test_whitespace_only_file_is_rejected_and_removed(self, store, tmp_path):
        path = tmp_path / "blank.txt"
        path.write_text(" \n\t ", encoding="utf-8")

        with pytest.raises(EmptyDocumentError):
            ingest_document(store, path, "Blank", "blank.txt", "text/plain", 4)

        assert not path.exists()
        assert store.list_entries() == []

    def test_unsupported_file_is_removed(self, store, tmp_path):
        path = tmp_path / "image.png"
        path.write_bytes(b"\x89PNG")

        with pytest.raises(UnsupportedFileTypeError):
            ingest_document(store, path, "Image", "image.png", "image/png", 4)

        assert not path.exists()
        assert store.list_entries() == []

    def test_malformed_file_is_removed(self, store, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"not a pdf")

        with pytest.raises(ExtractionError):
            ingest_document(store, path, "Broken", "broken.pdf", "application/pdf", 9)

        assert not path.exists()


class TestDeleteDocument:
    """Test deletion of knowledge entries with their files."""

    def test_delete_removes_entry_and_file(self, store, tmp_path):
        path = tmp_path / "doc.txt"
        path.write_text("Bone is hard.", encoding="utf-8")
        entry = ingest_document(store, path, "Bones", "doc.txt", "text/plain", 13)

        deleted = delete_document(store, tmp_path, entry.id)

        assert deleted.id == entry.id
        assert not path.exists()
        assert store.list_entries() == []

    def test_delete_with_missing_file(self, store, tmp_path):
        entry = store.add(make_entry("Seeded"))
        entry_with_file = store.add(make_entry("Gone").model_copy(update={"filename": "gone.txt"}))

        delete_document(store, tmp_path, entry_with_file.id)

        assert [e.id for e in store.list_entries()] == [entry.id]

    def test_delete_unknown(self, store, tmp_path):
        with pytest.raises(KnowledgeEntryNotFoundError) as exc_info:
            delete_document(store, tmp_path, "unknown")

        assert exc_info.value.status_code == 404
