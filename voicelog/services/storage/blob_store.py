"""
Transient on-disk storage for uploaded audio.

A blob lives only for the duration of one request: it is written when the
upload arrives, read once by the transcription client, and removed
afterwards. Names combine a millisecond timestamp with a random suffix so
concurrent requests never collide, without any locking.
"""

import logging
import re
import secrets
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from voicelog.core.exceptions import InputRejectedError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StoredBlob:
    """Handle to one stored upload."""

    path: Path
    original_name: str
    size: int


def _safe_name(suggested_name: str | None) -> str:
    """Strip directory components and unsafe characters from a client filename."""
    name = Path(suggested_name or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "audio"


class BlobStore:
    """Stores in-flight uploads under a single directory.

    Args:
        root: Directory for blobs; created on first ``store`` call.
        max_bytes: Optional size cap. ``None`` disables the check.
    """

    def __init__(self, root: str | Path, max_bytes: int | None = None) -> None:
        self._root = Path(root)
        self._max_bytes = max_bytes

    @property
    def root(self) -> Path:
        return self._root

    def check_size(self, size: int) -> None:
        """Raise ``InputRejectedError`` (413) if *size* exceeds ``max_bytes``."""
        if self._max_bytes is not None and size > self._max_bytes:
            raise InputRejectedError(
                f"Audio file too large: {size} bytes (limit {self._max_bytes})",
                status_code=413,
            )

    def _unique_name(self, suggested_name: str | None) -> str:
        stamp = int(time.time() * 1000)
        return f"{stamp}-{secrets.token_hex(4)}-{_safe_name(suggested_name)}"

    def store(self, raw_bytes: bytes, suggested_name: str | None = None) -> StoredBlob:
        """Write *raw_bytes* to a uniquely named file and return its handle.

        Raises:
            InputRejectedError: If the payload exceeds ``max_bytes`` (413).
        """
        self.check_size(len(raw_bytes))

        self._root.mkdir(parents=True, exist_ok=True)
        path = self._root / self._unique_name(suggested_name)
        # "xb" fails instead of overwriting if a name were ever reused
        with open(path, "xb") as fh:
            fh.write(raw_bytes)
        logger.debug("Stored upload %s (%d bytes)", path.name, len(raw_bytes))
        return StoredBlob(path=path, original_name=suggested_name or "", size=len(raw_bytes))

    @contextmanager
    def open_for_read(self, blob: StoredBlob) -> Iterator[BinaryIO]:
        """Yield a binary read handle that is closed on exit, even on error."""
        with open(blob.path, "rb") as fh:
            yield fh

    def exists(self, blob: StoredBlob) -> bool:
        return blob.path.exists()

    def delete(self, blob: StoredBlob) -> bool:
        """Remove the blob. Failures are logged, never raised.

        Returns:
            True if the file is gone afterwards, False if removal failed.
        """
        try:
            blob.path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to delete upload %s: %s", blob.path, exc)
            return False
        return True
