"""Validation and storage of multipart uploads."""

import asyncio
import logging
import os
from typing import List, NamedTuple
from uuid import uuid4

from fastapi import UploadFile

from lifestory.core.errors import ValidationFailure
from lifestory.core.storage import BlobStore
from lifestory.models.library import Media, MediaType

logger = logging.getLogger(__name__)

MB = 1024 * 1024

IMAGE_EXTENSIONS = frozenset({"jpeg", "jpg", "png", "gif", "webp"})
VIDEO_EXTENSIONS = frozenset({"mp4", "mov", "avi", "webm", "mkv"})
AUDIO_EXTENSIONS = frozenset({"mp3", "wav", "ogg", "m4a", "aac"})


class UploadRule(NamedTuple):
    """Constraints for one kind of upload."""

    field: str
    folder: str
    max_bytes: int
    extensions: frozenset
    max_files: int = 1


SERIES_THUMBNAIL = UploadRule("thumbnail", "series-thumbnails", 50 * MB, IMAGE_EXTENSIONS)
EPISODE_THUMBNAIL = UploadRule("thumbnail", "thumbnails", 50 * MB, IMAGE_EXTENSIONS)
EPISODE_MEDIA = UploadRule(
    "media", "media", 500 * MB, IMAGE_EXTENSIONS | VIDEO_EXTENSIONS, max_files=50
)
EPISODE_MUSIC = UploadRule("music", "music", 50 * MB, AUDIO_EXTENSIONS)


class StoredFile(NamedTuple):
    key: str
    url: str
    original_name: str


def file_extension(filename: str | None) -> str:
    """Lowercased extension without the dot, or '' when there is none."""
    return os.path.splitext(filename or "")[1].lower().lstrip(".")


def media_type_for(filename: str | None) -> MediaType:
    if file_extension(filename) in VIDEO_EXTENSIONS:
        return MediaType.VIDEO
    return MediaType.IMAGE


def make_key(folder: str, filename: str | None) -> str:
    """Build a unique storage key that keeps the original extension."""
    ext = file_extension(filename)
    suffix = f".{ext}" if ext else ""
    return f"{folder}/{uuid4().hex}{suffix}"


def _file_size(upload: UploadFile) -> int:
    if upload.size is not None:
        return upload.size
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


def validate_uploads(rule: UploadRule, files: List[UploadFile]) -> List[UploadFile]:
    """Check count, type and size of uploaded files against ``rule``.

    Raises ValidationFailure for the first offending file.
    """
    files = [f for f in files or [] if f is not None and f.filename]
    if not files:
        raise ValidationFailure(
            "No files uploaded" if rule.max_files > 1 else "No file uploaded"
        )
    if len(files) > rule.max_files:
        raise ValidationFailure(
            f"Too many files: at most {rule.max_files} allowed for '{rule.field}'"
        )

    for upload in files:
        if file_extension(upload.filename) not in rule.extensions:
            raise ValidationFailure(f"Unsupported file type: {upload.filename}")
        if _file_size(upload) > rule.max_bytes:
            raise ValidationFailure(
                f"File too large: {upload.filename} exceeds {rule.max_bytes // MB}MB"
            )
    return files


class UploadService:
    """Puts validated uploads into the blob store."""

    def __init__(self, store: BlobStore):
        self.store = store

    async def store_file(self, rule: UploadRule, upload: UploadFile) -> StoredFile:
        key = make_key(rule.folder, upload.filename)
        upload.file.seek(0)
        url = await asyncio.to_thread(
            self.store.put, key, upload.file, upload.content_type
        )
        return StoredFile(key=key, url=url, original_name=upload.filename or "")

    async def store_media(self, files: List[UploadFile]) -> List[Media]:
        """Store media files one at a time, keeping input order."""
        media = []
        for upload in files:
            stored = await self.store_file(EPISODE_MEDIA, upload)
            media.append(
                Media(
                    filename=stored.key,
                    original_name=stored.original_name,
                    type=media_type_for(stored.original_name),
                    url=stored.url,
                )
            )
        return media
