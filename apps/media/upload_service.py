"""
Media upload service for obituary and comment attachments.
Uses the default storage: S3 when configured, local files otherwise.
"""
import logging
import os
import secrets
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile

from apps.core.errors import RemoteFailure, ValidationFailed

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES = ['image/jpeg', 'image/png', 'image/webp', 'image/gif']
SUPPORTED_VIDEO_TYPES = ['video/mp4', 'video/webm', 'video/mov', 'video/quicktime', 'video/avi']
ALL_SUPPORTED_TYPES = SUPPORTED_IMAGE_TYPES + SUPPORTED_VIDEO_TYPES

MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10 MB
MAX_VIDEO_SIZE = 50 * 1024 * 1024  # 50 MB

DEFAULT_BUCKET = 'startup-logos'
MAX_PARALLEL_UPLOADS = 4


def max_size_for(mime_type: str) -> int:
    return MAX_VIDEO_SIZE if mime_type in SUPPORTED_VIDEO_TYPES else MAX_IMAGE_SIZE


def validate_upload_file(file: UploadedFile) -> Tuple[bool, Optional[str]]:
    """
    Validate one file against the type allow-list and its size ceiling.

    Returns:
        Tuple of (is_valid, error_message)
    """
    mime_type = file.content_type
    if mime_type not in ALL_SUPPORTED_TYPES:
        return False, (
            f"Unsupported file type: {mime_type}. Supported types: images (JPEG, PNG, WebP, GIF) "
            f"and videos (MP4, WebM, MOV, QuickTime, AVI)"
        )

    max_size = max_size_for(mime_type)
    if file.size > max_size:
        return False, f'File "{file.name}" is too large. Maximum size: {max_size // (1024 * 1024)}MB'

    return True, None


def _storage_name(file: UploadedFile, bucket: str) -> str:
    _, ext = os.path.splitext(file.name or '')
    suffix = secrets.token_hex(5)[:9]
    return f"{bucket}/{int(time.time() * 1000)}-{suffix}{ext.lower()}"


def _store(file: UploadedFile, path: str) -> str:
    """Save one file and return its public URL."""
    try:
        saved_path = default_storage.save(path, file)
        return default_storage.url(saved_path)
    except Exception as e:
        logger.error(f"Upload error for {file.name}: {e}")
        raise RemoteFailure(f"Failed to upload {file.name}: {e}")


def upload_media(files: Sequence[UploadedFile], bucket: str = DEFAULT_BUCKET) -> List[str]:
    """
    Upload files and return their public URLs in input order.

    Every file is validated before anything is uploaded, so an invalid file
    means no uploads at all. Uploads then run in parallel; the first failure
    is raised and no partial result is returned.

    Raises:
        ValidationFailed: a file has an unsupported type or is too large
        RemoteFailure: storage rejected an upload
    """
    files = list(files)
    if not files:
        return []

    for file in files:
        is_valid, error = validate_upload_file(file)
        if not is_valid:
            raise ValidationFailed(error)

    paths = [_storage_name(file, bucket) for file in files]

    workers = min(len(files), MAX_PARALLEL_UPLOADS)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(_store, file, path) for file, path in zip(files, paths)]
        urls = [future.result() for future in futures]

    logger.info(f"Uploaded {len(urls)} file(s) to {bucket}")
    return urls
