"""
Photo storage for rower pictures.

The roster service only needs "store these bytes, give me back a URL".
``PhotoStore`` describes that contract and ``LocalPhotoStore`` fulfils
it by writing files into a directory that the application serves
under ``/uploads``.  Only JPEG and PNG images are accepted and uploads
are capped at 5 MiB by default.
"""

from __future__ import annotations

import asyncio
import logging
import random
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from crew_roster_api.app.core.errors import TooLarge, UnsupportedFormat

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 5 * 1024 * 1024

# Both the declared media type and the filename extension must match.
_ALLOWED_TYPES = re.compile(r"jpeg|jpg|png")


@dataclass
class PhotoUpload:
    """Raw upload handed to a photo store."""

    content: bytes
    content_type: str
    filename: str = ""


class PhotoStore(Protocol):
    async def save(self, upload: PhotoUpload) -> str:
        """Persist ``upload`` and return a URL it can be fetched from."""
        ...


class LocalPhotoStore:
    """Store photos as files in ``directory``."""

    def __init__(
        self,
        directory: Path | str,
        url_prefix: str = "/uploads",
        max_bytes: int = DEFAULT_MAX_BYTES,
    ) -> None:
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes

    async def save(self, upload: PhotoUpload) -> str:
        extension = self._check(upload)
        filename = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{extension}"
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write, filename, upload.content)
        logger.info("Stored photo %s (%d bytes)", filename, len(upload.content))
        return f"{self.url_prefix}/{filename}"

    def _write(self, filename: str, content: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / filename).write_bytes(content)

    def _check(self, upload: PhotoUpload) -> str:
        """Apply the format and size policy, returning the file extension."""
        extension = Path(upload.filename or "").suffix.lower()
        content_type = (upload.content_type or "").lower()
        if not (_ALLOWED_TYPES.search(content_type) and _ALLOWED_TYPES.search(extension)):
            raise UnsupportedFormat("Unsupported file format. Only JPEG and PNG are allowed.")
        if len(upload.content) > self.max_bytes:
            raise TooLarge(f"File size exceeds the allowed limit of {_format_limit(self.max_bytes)}.")
        return extension


def _format_limit(max_bytes: int) -> str:
    mib = max_bytes / (1024 * 1024)
    if mib >= 1 and mib == int(mib):
        return f"{int(mib)}MB"
    return f"{max_bytes} bytes"


def photo_upload_or_none(content: Optional[bytes], content_type: str, filename: str) -> Optional[PhotoUpload]:
    """Build a ``PhotoUpload`` unless the form carried an empty file field."""
    if not content and not filename:
        return None
    return PhotoUpload(content=content or b"", content_type=content_type, filename=filename)
