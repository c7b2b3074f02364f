"""Blob store that keeps photo bytes in a private temporary directory."""

import asyncio
import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from uuid import uuid4

from photo_albums.domain.errors import RevokedHandleError
from photo_albums.domain.photos import Blob
from photo_albums.services.blobs import BlobStore

_logger = logging.getLogger(__name__)


@dataclass
class TempDirBlobStore(BlobStore):
    """Each blob is one file; revoking a reference deletes its file."""

    root: Path
    _content_types: dict[str, str] = field(default_factory=dict, init=False)

    @classmethod
    def create(cls, parent_dir: str | None = None) -> "TempDirBlobStore":
        """Create a blob store backed by a fresh temporary directory."""
        root = Path(tempfile.mkdtemp(prefix="photo-albums-", dir=parent_dir))
        return cls(root=root)

    async def create_blob(self, content: bytes, content_type: str) -> str:
        """Write the content to a new file and return its reference."""
        path = self.root / uuid4().hex
        await asyncio.to_thread(path.write_bytes, content)
        ref = path.as_uri()
        self._content_types[ref] = content_type
        return ref

    def read(self, ref: str) -> Blob:
        """Return the blob behind a live reference."""
        content_type = self._content_types.get(ref)
        if content_type is None:
            raise RevokedHandleError(ref)
        return Blob(content=self._path(ref).read_bytes(), content_type=content_type)

    def revoke(self, ref: str) -> None:
        """Delete the file behind a reference."""
        if self._content_types.pop(ref, None) is None:
            return
        self._path(ref).unlink(missing_ok=True)

    def live_refs(self) -> set[str]:
        """Return references that have not been revoked."""
        return set(self._content_types)

    def close(self) -> None:
        """Remove the directory and everything left in it."""
        if self._content_types:
            _logger.warning(
                "Discarding %s unrevoked photo blobs", len(self._content_types)
            )
        self._content_types.clear()
        shutil.rmtree(self.root, ignore_errors=True)

    def _path(self, ref: str) -> Path:
        return self.root / ref.rsplit("/", 1)[-1]
