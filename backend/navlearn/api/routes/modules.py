"""Training module content: public listing and admin curation."""

import logging
from pathlib import Path
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import BaseModel, Field

from navlearn.core.auth import require_admin
from navlearn.core.storage import DataRepository, get_repository
from navlearn.core.uploads import get_upload_dir, save_upload
from navlearn.kb.ingestion import remove_file
from navlearn.models.records import ModuleContentEntry

logger = logging.getLogger(__name__)

modules_router = APIRouter(tags=["modules"])


class UserSummary(BaseModel):
    """Trainee as listed to admins (no credentials)."""
    email: str
    first_name: str
    last_name: str
    hospital: str
    serial: str


class AdminUsersResponse(BaseModel):
    users: list[UserSummary]
    progress: dict[str, dict] = Field(default_factory=dict)


@modules_router.get("/modules/content")
def get_module_content(
    module: str | None = Query(None, description="Module name, e.g. cranial"),
    repository: DataRepository = Depends(get_repository),
) -> dict:
    """
    List module content without authentication.

    Returns every module, or only `module` when given (an empty list for
    unknown modules).
    """
    content = repository.read().module_content
    if module:
        return {"content": content.get(module, [])}
    return {"content": content}


@modules_router.get("/admin/modules/content")
def get_admin_module_content(
    admin_email: str = Depends(require_admin),
    repository: DataRepository = Depends(get_repository),
) -> dict:
    return {"content": repository.read().module_content}


@modules_router.post("/admin/modules/upload")
async def upload_module_content(
    module: str = Form(...),
    type: str = Form(...),
    title: str = Form(...),
    file: UploadFile = File(...),
    admin_email: str = Depends(require_admin),
    repository: DataRepository = Depends(get_repository),
    upload_dir: Path = Depends(get_upload_dir),
) -> dict:
    """Attach an uploaded file to a module, creating the module if needed."""
    module = module.strip()
    if not module or not type.strip() or not title.strip():
        raise HTTPException(status_code=400, detail="Missing required fields")

    saved = await save_upload(file, upload_dir)

    entry = ModuleContentEntry(
        title=title.strip(),
        type=type,
        filename=saved.filename,
        original_name=saved.original_name,
        size=saved.size,
    )

    data = repository.read()
    data.module_content.setdefault(module, []).append(entry)
    repository.write(data)

    logger.info(f"Uploaded module content '{entry.title}' to {module}")
    return {
        "message": "Content uploaded successfully",
        "content": entry.model_dump(mode="json"),
    }


@modules_router.delete("/admin/modules/content/{module}/{index}")
def delete_module_content(
    module: str,
    index: int,
    admin_email: str = Depends(require_admin),
    repository: DataRepository = Depends(get_repository),
    upload_dir: Path = Depends(get_upload_dir),
) -> dict:
    """Remove a module content entry by position, along with its file."""
    data = repository.read()
    entries = data.module_content.get(module)
    if not entries or not 0 <= index < len(entries):
        raise HTTPException(status_code=404, detail="Content not found")

    entry = entries.pop(index)
    remove_file(upload_dir / entry.filename)
    repository.write(data)

    logger.info(f"Deleted module content '{entry.title}' from {module}")
    return {"message": "Content deleted successfully"}


@modules_router.get("/admin/users", response_model=AdminUsersResponse)
def list_users(
    admin_email: str = Depends(require_admin),
    repository: DataRepository = Depends(get_repository),
) -> AdminUsersResponse:
    """All trainees with their recorded progress."""
    data = repository.read()
    users = [
        UserSummary(
            email=u.email,
            first_name=u.first_name,
            last_name=u.last_name,
            hospital=u.hospital,
            serial=u.serial,
        )
        for u in data.users.values()
    ]
    return AdminUsersResponse(users=users, progress=data.progress)
