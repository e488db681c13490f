# File: src/bizpass/core/storage.py
"""Object storage for uploaded business logos."""

import asyncio
import os
import time
from pathlib import Path, PurePosixPath
from uuid import UUID

from bizpass.core.errors import StorageError, ValidationError
from bizpass.core.logging import get_logger

logger = get_logger(__name__)

ALLOWED_LOGO_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp", "svg"}
MAX_LOGO_BYTES = 2 * 1024 * 1024


class LocalObjectStorage:
    """
    Filesystem-backed bucket.

    Objects are written under ``base_dir`` and served by the app under
    ``public_base_url`` (see the ``/media`` mount in main.py).
    """

    def __init__(self, base_dir: Path, public_base_url: str):
        self.base_dir = base_dir
        self.public_base_url = public_base_url.rstrip("/")

    def _resolve(self, path: str) -> Path:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise StorageError("Invalid object path", details={"path": path})
        return self.base_dir.joinpath(*relative.parts)

    def _write(self, target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        # Objects are never overwritten
        with target.open("xb") as fh:
            fh.write(data)

    async def upload(self, path: str, data: bytes) -> None:
        target = self._resolve(path)
        try:
            await asyncio.to_thread(self._write, target, data)
        except OSError as exc:
            logger.error("storage.upload_failed", path=path, error=str(exc))
            raise StorageError("Upload failed", details={"path": path}) from exc
        logger.info("storage.uploaded", path=path, size=len(data))

    def get_public_url(self, path: str) -> str:
        return f"{self.public_base_url}/{PurePosixPath(path).as_posix()}"


def logo_object_path(user_id: UUID, filename: str) -> str:
    """``logos/{user_id}-{epoch_ms}.{ext}``; rejects non-image extensions."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if ext not in ALLOWED_LOGO_EXTENSIONS:
        raise ValidationError(
            "Logo must be an image file",
            details={"allowed": sorted(ALLOWED_LOGO_EXTENSIONS)},
        )
    return f"logos/{user_id}-{int(time.time() * 1000)}.{ext}"


def get_storage_dir() -> Path:
    return Path(os.getenv("STORAGE_DIR", "media")).resolve()


def get_storage() -> LocalObjectStorage:
    """FastAPI dependency for the object storage collaborator."""
    return LocalObjectStorage(
        base_dir=get_storage_dir(),
        public_base_url=os.getenv("STORAGE_PUBLIC_URL", "/media"),
    )
