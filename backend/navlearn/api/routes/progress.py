"""Per-trainee progress tracking."""

import logging
from typing import Any
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from navlearn.core.auth import require_user
from navlearn.core.storage import DataRepository, get_repository

logger = logging.getLogger(__name__)

progress_router = APIRouter(prefix="/progress", tags=["progress"])


class ProgressResponse(BaseModel):
    progress: dict[str, Any] = Field(default_factory=dict, description="Section -> value")


class ProgressUpdate(BaseModel):
    """Request model for recording progress in one section."""
    section: str
    value: Any = None


@progress_router.get("", response_model=ProgressResponse)
def get_progress(
    email: str = Depends(require_user),
    repository: DataRepository = Depends(get_repository),
) -> ProgressResponse:
    return ProgressResponse(progress=repository.read().progress.get(email, {}))


@progress_router.post("")
def update_progress(
    update: ProgressUpdate,
    email: str = Depends(require_user),
    repository: DataRepository = Depends(get_repository),
) -> dict:
    """Set the value of one section, keeping the others."""
    if not update.section.strip():
        raise HTTPException(status_code=400, detail="Missing fields")

    data = repository.read()
    data.progress.setdefault(email, {})[update.section] = update.value
    repository.write(data)

    return {"success": True}
