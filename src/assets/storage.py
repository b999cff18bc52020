"""Disk storage for uploaded files and the upload-and-replace protocol.

An upload goes through four steps:

1. received: Django's upload handlers have buffered the files; nothing is
   written under ``MEDIA_ROOT`` yet. An empty upload is rejected here.
2. checked: the view loads the owner (NotFound when it does not exist).
3. replaced / appended: the file is written under a generated name. For a
   single slot (avatar) the previous file is deleted first; for a gallery each
   file becomes an additional row.
4. persisted: the metadata row is committed and returned.

Files written during a request that fails are removed again, so a failed
upload never leaves an orphan on disk.
"""

import logging
import os
import time
import uuid
from dataclasses import dataclass

from django.conf import settings
from django.core.files.storage import Storage, default_storage
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction

from core.exceptions import InternalError, InvalidParameter
from .models import Asset

logger = logging.getLogger(__name__)

AVATAR_DIRECTORY = "images/avatars"
GALLERY_DIRECTORY = "images/uploads"


def generate_name(fieldname: str, original_name: str) -> str:
    """Collision-resistant file name keeping the original extension."""
    extension = os.path.splitext(original_name or "")[1]
    return f"{fieldname}-{int(time.time() * 1000)}-{uuid.uuid4()}{extension}"


def remove_file(name: str, storage: Storage = default_storage) -> bool:
    """Delete a stored file; failures are logged, never raised.

    A file that is already gone counts as removed.
    """
    if not name:
        return False
    try:
        storage.delete(name)
    except OSError as exc:
        logger.warning("Could not delete file %s: %s", name, exc)
        return False
    logger.info("Deleted file %s", name)
    return True


@dataclass(frozen=True)
class StoredFile:
    """A file written to storage but not necessarily persisted as an Asset."""

    path: str
    mimetype: str
    size: int

    @property
    def filename(self) -> str:
        return os.path.basename(self.path)

    def as_fields(self) -> dict:
        return {
            "filename": self.filename,
            "path": self.path,
            "mimetype": self.mimetype,
            "size": self.size,
        }


class AssetUploader:
    """Store uploads of one multipart field into one directory.

    ``multiple=False`` describes a single-slot attachment (one file kept per
    owner); ``multiple=True`` a gallery that grows with every upload.
    """

    def __init__(self, directory: str, fieldname: str, multiple: bool = False, storage: Storage | None = None):
        self.directory = directory
        self.fieldname = fieldname
        self.multiple = multiple
        self.storage = storage or default_storage

    def files_from(self, request) -> list[UploadedFile]:
        """Return the uploaded files or fail before anything touches the disk."""
        files = request.FILES.getlist(self.fieldname)
        if not files:
            raise InvalidParameter("No file uploaded", data={"field": self.fieldname})
        if not self.multiple and len(files) > 1:
            raise InvalidParameter(
                f"Only one file can be uploaded in '{self.fieldname}'",
                data={"field": self.fieldname, "count": len(files)},
            )
        limit = getattr(settings, "MAX_GALLERY_FILES", None)
        if self.multiple and limit and len(files) > limit:
            raise InvalidParameter(
                f"At most {limit} files can be uploaded at once",
                data={"field": self.fieldname, "count": len(files)},
            )
        return files

    def _store(self, upload: UploadedFile) -> StoredFile:
        name = f"{self.directory}/{generate_name(self.fieldname, upload.name)}"
        path = self.storage.save(name, upload)
        return StoredFile(
            path=path,
            mimetype=upload.content_type or "application/octet-stream",
            size=upload.size,
        )

    def _discard(self, stored: list[StoredFile]) -> None:
        for item in stored:
            remove_file(item.path, self.storage)

    def replace(self, user, upload: UploadedFile) -> tuple[Asset, bool]:
        """Make ``upload`` the user's single asset; return ``(asset, created)``.

        The previous backing file is deleted before the metadata row is
        updated. Failing to delete it is logged and does not block the upload.
        """
        stored = self._store(upload)
        try:
            with transaction.atomic():
                previous = Asset.objects.select_for_update().filter(user=user).first()
                if previous is not None and previous.path != stored.path:
                    if not remove_file(previous.path, self.storage):
                        logger.warning("Stale avatar %s of user %s was not removed", previous.path, user.pk)
                asset, created = Asset.objects.update_or_create(user=user, defaults=stored.as_fields())
        except Exception:
            self._discard([stored])
            raise
        return asset, created

    def append(self, article, uploads: list[UploadedFile]) -> list[Asset]:
        """Add every upload to the article's gallery, all or nothing."""
        stored: list[StoredFile] = []
        try:
            with transaction.atomic():
                assets = []
                for upload in uploads:
                    item = self._store(upload)
                    stored.append(item)
                    assets.append(Asset.objects.create(article=article, **item.as_fields()))
        except Exception as exc:
            self._discard(stored)
            logger.exception("Gallery upload for article %s failed after %d file(s)", article.pk, len(stored))
            raise InternalError(
                "Upload failed; no files were kept",
                data={"stored": [item.filename for item in stored], "received": len(uploads)},
            ) from exc
        return assets


__all__ = [
    "AVATAR_DIRECTORY",
    "GALLERY_DIRECTORY",
    "AssetUploader",
    "StoredFile",
    "generate_name",
    "remove_file",
]
