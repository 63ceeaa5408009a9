"""Storage for uploaded images, category icons and avatars."""

from __future__ import annotations

import asyncio
import logging
import uuid
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from aurora.core.settings import settings

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class BlobStore(Protocol):
    """Anything that can persist bytes and hand back a public URL."""

    async def put(
        self,
        data: bytes,
        *,
        folder: str,
        mime_type: str,
        filename: str | None = None,
    ) -> str:
        """Store ``data`` under ``folder`` and return the URL it is served from."""
        ...


class LocalBlobStore:
    """Blob store backed by a directory that the app serves under ``media_base_url``."""

    def __init__(self, root: str | Path, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    @staticmethod
    def generate_name(mime_type: str, filename: str | None = None) -> str:
        """Return a UUID file name whose extension follows the MIME type."""
        ext = _EXTENSIONS.get(mime_type)
        if ext is None and filename:
            ext = Path(filename).suffix.lower() or None
        return f"{uuid.uuid4()}{ext or '.bin'}"

    def _write(self, target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    async def put(
        self,
        data: bytes,
        *,
        folder: str,
        mime_type: str,
        filename: str | None = None,
    ) -> str:
        name = self.generate_name(mime_type, filename)
        target = self.root / folder / name
        await asyncio.to_thread(self._write, target, data)
        logger.info("Stored %d bytes at %s", len(data), target)
        return f"{self.base_url}/{folder}/{name}"


@lru_cache(maxsize=1)
def get_blob_store() -> BlobStore:
    """Return the process-wide blob store."""
    return LocalBlobStore(settings.media_root, settings.media_base_url)
