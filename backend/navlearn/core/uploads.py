"""Saving multipart uploads under the upload directory."""

import logging
import secrets
import string
import time
from pathlib import Path
from typing import NamedTuple
from fastapi import HTTPException, UploadFile

from navlearn.core.config import settings

logger = logging.getLogger(__name__)

_NAME_ALPHABET = string.ascii_lowercase + string.digits
_READ_CHUNK_SIZE = 1024 * 1024


class SavedUpload(NamedTuple):
    """An upload written to disk."""
    path: Path
    filename: str
    original_name: str
    content_type: str
    size: int


def unique_filename(original_name: str) -> str:
    """`<epoch-ms>-<9 random chars><extension>`, keeping the original extension."""
    suffix = Path(original_name).suffix
    random_part = "".join(secrets.choice(_NAME_ALPHABET) for _ in range(9))
    return f"{int(time.time() * 1000)}-{random_part}{suffix}"


async def save_upload(
    file: UploadFile,
    upload_dir: Path | None = None,
    max_size: int | None = None,
) -> SavedUpload:
    """
    Stream an upload to disk under a unique name.

    Raises:
        HTTPException: 413 if the file exceeds the size limit (nothing is kept)
    """
    upload_dir = upload_dir or settings.UPLOAD_DIR
    max_size = max_size or settings.MAX_UPLOAD_SIZE
    upload_dir.mkdir(parents=True, exist_ok=True)

    original_name = file.filename or "untitled"
    filename = unique_filename(original_name)
    path = upload_dir / filename

    size = 0
    with path.open("wb") as out:
        while chunk := await file.read(_READ_CHUNK_SIZE):
            size += len(chunk)
            if size > max_size:
                break
            out.write(chunk)

    if size > max_size:
        path.unlink(missing_ok=True)
        raise HTTPException(
            status_code=413,
            detail=f"File size exceeds {max_size // (1024 * 1024)} MB limit",
        )

    logger.info(f"Saved upload {original_name} as {filename} ({size} bytes)")
    return SavedUpload(
        path=path,
        filename=filename,
        original_name=original_name,
        content_type=file.content_type or "application/octet-stream",
        size=size,
    )


def get_upload_dir() -> Path:
    """FastAPI dependency returning the upload directory."""
    return settings.UPLOAD_DIR
