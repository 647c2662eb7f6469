"""Pydantic models for the chat knowledge base."""

import uuid
from datetime import datetime, timezone
from pydantic import BaseModel, Field


class KnowledgeEntry(BaseModel):
    """An ingested document whose extracted text the chat answers from.

    Entries are only created once extraction produced non-empty text.
    """
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str
    original_name: str
    mime_type: str
    size: int
    text: str = Field(..., min_length=1)
    filename: str | None = Field(None, description="Backing file under the upload directory")
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class KnowledgeEntrySummary(BaseModel):
    """Knowledge entry as listed to admins, without the full text."""
    id: str
    title: str
    original_name: str
    mime_type: str
    size: int
    text_length: int
    uploaded_at: datetime

    @classmethod
    def from_entry(cls, entry: KnowledgeEntry) -> "KnowledgeEntrySummary":
        return cls(
            id=entry.id,
            title=entry.title,
            original_name=entry.original_name,
            mime_type=entry.mime_type,
            size=entry.size,
            text_length=len(entry.text),
            uploaded_at=entry.uploaded_at,
        )


class ChatRequest(BaseModel):
    """Question asked to the training chat."""
    question: str = ""


class MatchResult(BaseModel):
    """Best-matching sentence for a question.

    `reply` is what the chat shows: the sentence itself, or a fallback
    message when there is no material or no overlapping sentence.
    """
    score: int = Field(0, ge=0, description="Question tokens found in the sentence")
    sentence: str | None = None
    source_title: str | None = None
    reply: str
