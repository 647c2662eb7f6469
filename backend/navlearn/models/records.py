"""Records persisted in the NavLearn data document."""

from datetime import datetime, timezone
from typing import Any
from pydantic import BaseModel, Field

from navlearn.models.knowledge import KnowledgeEntry

DEFAULT_MODULES = ("cranial", "spine", "ent")


def _default_module_content() -> dict[str, list["ModuleContentEntry"]]:
    return {name: [] for name in DEFAULT_MODULES}


class UserRecord(BaseModel):
    """A registered trainee."""
    email: str
    first_name: str
    last_name: str
    serial: str
    hospital: str
    password_hash: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class AdminRecord(BaseModel):
    """An administrator allowed to curate content."""
    email: str
    password_hash: str


class ModuleContentEntry(BaseModel):
    """A file attached to a training module (cranial, spine, ent, ...)."""
    title: str
    type: str = Field(..., description="Content kind as labelled by the admin, e.g. video or pdf")
    filename: str = Field(..., description="Stored name under the upload directory")
    original_name: str
    size: int
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class StoreData(BaseModel):
    """The whole persisted document, read and rewritten as one unit.

    - users: email -> trainee
    - sessions / admin_sessions: session token -> email
    - progress: email -> {section: value}
    - module_content: module name -> uploaded files, in upload order
    - knowledge: documents the chat answers from, in upload order
    """
    users: dict[str, UserRecord] = Field(default_factory=dict)
    sessions: dict[str, str] = Field(default_factory=dict)
    progress: dict[str, dict[str, Any]] = Field(default_factory=dict)
    admins: dict[str, AdminRecord] = Field(default_factory=dict)
    admin_sessions: dict[str, str] = Field(default_factory=dict)
    module_content: dict[str, list[ModuleContentEntry]] = Field(default_factory=_default_module_content)
    knowledge: list[KnowledgeEntry] = Field(default_factory=list)
