"""Local blob storage abstractions."""

from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from photo_albums.domain.errors import RevokedHandleError
from photo_albums.domain.photos import Blob


class BlobStore(Protocol):
    """Storage for downloaded binary content addressed by local references."""

    async def create_blob(self, content: bytes, content_type: str) -> str:
        """Store content and return a new local reference to it."""

    def read(self, ref: str) -> Blob:
        """Return the content behind a live reference."""

    def revoke(self, ref: str) -> None:
        """Release the content behind a reference."""

    def live_refs(self) -> set[str]:
        """Return every reference that has not been revoked."""


@dataclass
class InMemoryBlobStore(BlobStore):
    """In-memory blob store using ``blob:`` references."""

    _blobs: dict[str, Blob]

    def __init__(self) -> None:
        self._blobs = {}

    async def create_blob(self, content: bytes, content_type: str) -> str:
        """Keep the content in memory under a fresh reference."""
        ref = f"blob:{uuid4()}"
        self._blobs[ref] = Blob(content=content, content_type=content_type)
        return ref

    def read(self, ref: str) -> Blob:
        """Return the stored blob."""
        blob = self._blobs.get(ref)
        if blob is None:
            raise RevokedHandleError(ref)
        return blob

    def revoke(self, ref: str) -> None:
        """Forget the stored blob."""
        self._blobs.pop(ref, None)

    def live_refs(self) -> set[str]:
        """Return references that have not been revoked."""
        return set(self._blobs)
