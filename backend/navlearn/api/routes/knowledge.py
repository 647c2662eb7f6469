"""Knowledge base administration and the training chat."""

import logging
from pathlib import Path
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from navlearn.core.auth import require_admin, require_user
from navlearn.core.storage import DataRepository, get_repository
from navlearn.core.uploads import get_upload_dir, save_upload
from navlearn.kb.errors import KnowledgeError
from navlearn.kb.ingestion import delete_document, ingest_document
from navlearn.kb.matcher import answer
from navlearn.kb.store import KnowledgeStore
from navlearn.models.knowledge import ChatRequest, KnowledgeEntrySummary, MatchResult

logger = logging.getLogger(__name__)

knowledge_router = APIRouter(tags=["knowledge-base"])


def get_knowledge_store(repository: DataRepository = Depends(get_repository)) -> KnowledgeStore:
    return KnowledgeStore(repository)


@knowledge_router.post("/admin/knowledge/upload", response_model=KnowledgeEntrySummary)
async def upload_knowledge_document(
    title: str = Form(...),
    file: UploadFile = File(...),
    admin_email: str = Depends(require_admin),
    store: KnowledgeStore = Depends(get_knowledge_store),
    upload_dir: Path = Depends(get_upload_dir),
) -> KnowledgeEntrySummary:
    """
    Upload a document for the chat to answer from.

    Supports TXT, PDF and DOCX. The file is rejected (and removed) when its
    type is unsupported, it cannot be parsed, or it contains no text.
    """
    title = title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="Missing required fields")

    saved = await save_upload(file, upload_dir)
    logger.info(f"Processing knowledge upload: file={saved.original_name}, type={saved.content_type}")

    try:
        entry = ingest_document(
            store,
            path=saved.path,
            title=title,
            original_name=saved.original_name,
            mime_type=saved.content_type,
            size=saved.size,
        )
    except KnowledgeError as e:
        logger.warning(f"Rejected knowledge upload {saved.original_name}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return KnowledgeEntrySummary.from_entry(entry)


@knowledge_router.get("/admin/knowledge", response_model=list[KnowledgeEntrySummary])
def list_knowledge_documents(
    admin_email: str = Depends(require_admin),
    store: KnowledgeStore = Depends(get_knowledge_store),
) -> list[KnowledgeEntrySummary]:
    return [KnowledgeEntrySummary.from_entry(e) for e in store.list_entries()]


@knowledge_router.delete("/admin/knowledge/{entry_id}")
def delete_knowledge_document(
    entry_id: str,
    admin_email: str = Depends(require_admin),
    store: KnowledgeStore = Depends(get_knowledge_store),
    upload_dir: Path = Depends(get_upload_dir),
) -> dict:
    try:
        entry = delete_document(store, upload_dir, entry_id)
    except KnowledgeError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    logger.info(f"Deleted knowledge document '{entry.title}'")
    return {"message": "Document deleted successfully"}


@knowledge_router.post("/chat", response_model=MatchResult)
def chat(
    request_body: ChatRequest,
    email: str = Depends(require_user),
    store: KnowledgeStore = Depends(get_knowledge_store),
) -> MatchResult:
    """Answer a trainee question with the best-matching sentence from the knowledge base."""
    return answer(request_body.question, store.list_entries())
