# core/uploads.py
"""
Local staging of uploaded files.

An uploaded file is written to a unique file in the staging directory, handed
to the storage adapter by path, and removed when the request is done with it,
whether the upload succeeded or not.
"""
import asyncio
import os
import shutil
import tempfile
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import UploadFile

from core.config import settings, logger as core_logger

logger = core_logger.getChild("Uploads")


def generate_blob_name(original_filename: Optional[str], now_ms: Optional[int] = None) -> str:
    """Millisecond timestamp followed by the original file's extension, e.g. '1718031234567.png'."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    extension = os.path.splitext(original_filename or "")[1]
    return f"{now_ms}{extension}"


def _write_upload(upload: UploadFile, fd: int) -> None:
    upload.file.seek(0)
    with os.fdopen(fd, "wb") as out:
        shutil.copyfileobj(upload.file, out)


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
        logger.debug(f"Removed staged upload {path}")
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove staged upload {path}: {e}")


@asynccontextmanager
async def staged_upload(upload: UploadFile, blob_name: str, directory: Optional[str] = None) -> AsyncIterator[str]:
    """Writes the upload to a uniquely named file in the staging directory and yields its path.

    The staged path keeps the blob name's extension and is unique per call, even when
    two requests generate the same blob name. The file is deleted on exit.
    """
    staging_dir = directory or settings.UPLOAD_DIR
    os.makedirs(staging_dir, exist_ok=True)
    stem, extension = os.path.splitext(blob_name)
    fd, path = tempfile.mkstemp(dir=staging_dir, prefix=f"{stem}-", suffix=extension)

    try:
        await asyncio.to_thread(_write_upload, upload, fd)
        logger.debug(f"Staged upload '{upload.filename}' at {path}")
        yield path
    finally:
        await asyncio.to_thread(_remove_quietly, path)
