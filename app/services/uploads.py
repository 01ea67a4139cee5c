"""
Validation and storage of user-uploaded files (avatars, resumes, logos).
"""

import logging
import os
from typing import Optional

from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.storage import StorageBackend

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})
DOCUMENT_EXTENSIONS = frozenset({".pdf", ".doc", ".docx"})


def _size_of(upload: UploadFile) -> int:
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


def store_upload(
    storage: StorageBackend,
    upload: Optional[UploadFile],
    folder: str,
    allowed_extensions: frozenset,
) -> str:
    """
    Check type and size, then hand the file to the storage provider.

    Returns:
        URL/path reported by the storage backend

    Raises:
        ValidationError: no file, disallowed extension, or too large
    """
    if upload is None or not upload.filename:
        raise ValidationError("Please upload a file")

    extension = os.path.splitext(upload.filename)[1].lower()
    if extension not in allowed_extensions:
        allowed = ", ".join(sorted(ext.lstrip(".") for ext in allowed_extensions))
        raise ValidationError(f"Unsupported file type. Allowed: {allowed}")

    if _size_of(upload) > settings.MAX_UPLOAD_BYTES:
        raise ValidationError(f"File too large. Maximum size is {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB")

    url = storage.upload_file(upload.file, upload.filename, folder)
    logger.info(f"Stored upload {upload.filename} in {folder}: {url}")
    return url


def discard_replaced(storage: StorageBackend, previous: Optional[str]) -> None:
    """Remove a file that a new upload superseded; failures only get logged."""
    if previous and not storage.delete_file(previous):
        logger.warning(f"Could not delete replaced file {previous}")
