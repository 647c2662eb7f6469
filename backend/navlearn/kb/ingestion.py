"""Admin ingestion and deletion of knowledge documents."""
import logging
from pathlib import Path

from navlearn.core.tracing import get_tracer, safe_span_attributes
from navlearn.kb.errors import EmptyDocumentError, KnowledgeEntryNotFoundError
from navlearn.kb.extractor import extract_text
from navlearn.kb.store import KnowledgeStore
from navlearn.models.knowledge import KnowledgeEntry

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


def remove_file(path: Path) -> None:
    """Delete an uploaded file, logging instead of failing."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.error(f"Error deleting file {path}: {e}")


def ingest_document(
    store: KnowledgeStore,
    path: Path,
    title: str,
    original_name: str,
    mime_type: str,
    size: int,
) -> KnowledgeEntry:
    """
    Extract an uploaded file and add it to the knowledge store.

    The uploaded file is kept as the entry's backing file. It is deleted
    when extraction fails or yields only whitespace.

    Args:
        store: Knowledge store to append to
        path: Saved upload
        title: Display title, already trimmed
        original_name: Client-side filename
        mime_type: Declared MIME type
        size: Upload size in bytes

    Returns:
        The stored entry

    Raises:
        UnsupportedFileTypeError: For formats other than TXT, PDF and DOCX
        ExtractionError: If the document cannot be parsed
        EmptyDocumentError: If the document has no text
    """
    with tracer.start_as_current_span("kb.ingest_document") as span:
        span.set_attributes(safe_span_attributes(
            title=title,
            mime_type=mime_type,
            size=size,
        ))

        try:
            text = extract_text(path, mime_type, original_name).strip()
        except Exception:
            remove_file(path)
            raise

        if not text:
            remove_file(path)
            raise EmptyDocumentError()

        entry = store.add(KnowledgeEntry(
            title=title,
            original_name=original_name,
            mime_type=mime_type,
            size=size,
            text=text,
            filename=path.name,
        ))
        span.set_attribute("entry_id", entry.id)
        return entry


def delete_document(store: KnowledgeStore, upload_dir: Path, entry_id: str) -> KnowledgeEntry:
    """
    Remove a knowledge entry and its backing file.

    Raises:
        KnowledgeEntryNotFoundError: If no entry has this id
    """
    entry = store.remove(entry_id)
    if entry is None:
        raise KnowledgeEntryNotFoundError(entry_id)

    if entry.filename:
        remove_file(upload_dir / entry.filename)

    return entry
