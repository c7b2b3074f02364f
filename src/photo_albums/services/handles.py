"""Ownership of the local photo handles shown by one view."""

import logging
from dataclasses import dataclass, field

from photo_albums.domain.errors import RevokedHandleError
from photo_albums.domain.photos import Blob, PhotoHandle
from photo_albums.services.blobs import BlobStore

_logger = logging.getLogger(__name__)


@dataclass(eq=False)
class HandleRegistry:
    """Maps photo ids to live handles and revokes them when they leave view.

    Every registered handle is revoked exactly once: when it is replaced,
    removed, or when the owning view closes. Handles registered after
    ``close`` are revoked immediately, so late results from abandoned
    fetches cannot leak.
    """

    blob_store: BlobStore
    _handles: dict[int, PhotoHandle] = field(default_factory=dict, init=False)
    closed: bool = False

    def register(self, handle: PhotoHandle) -> None:
        """Insert a handle, revoking any handle it replaces."""
        if self.closed:
            self.blob_store.revoke(handle.local_ref)
            return
        previous = self._handles.get(handle.id)
        if previous is not None and previous.local_ref != handle.local_ref:
            self.blob_store.revoke(previous.local_ref)
        self._handles[handle.id] = handle

    def revoke(self, photo_id: int) -> bool:
        """Release a photo's handle; return False if none was registered."""
        handle = self._handles.pop(photo_id, None)
        if handle is None:
            return False
        self.blob_store.revoke(handle.local_ref)
        return True

    def revoke_all(self) -> int:
        """Release every handle and return how many were released."""
        handles = list(self._handles.values())
        self._handles.clear()
        for handle in handles:
            self.blob_store.revoke(handle.local_ref)
        return len(handles)

    def close(self) -> None:
        """Tear down the owner: release everything and refuse new handles."""
        released = self.revoke_all()
        self.closed = True
        if released:
            _logger.info("Revoked %s photo handles on teardown", released)

    def get(self, photo_id: int) -> PhotoHandle | None:
        """Return the live handle for a photo, if any."""
        return self._handles.get(photo_id)

    def read(self, photo_id: int) -> Blob:
        """Dereference a photo's live handle."""
        handle = self._handles.get(photo_id)
        if handle is None:
            raise RevokedHandleError(f"photo:{photo_id}")
        return self.blob_store.read(handle.local_ref)

    def handles(self) -> list[PhotoHandle]:
        """Return live handles in registration order."""
        return list(self._handles.values())

    def ids(self) -> set[int]:
        """Return ids with a live handle."""
        return set(self._handles)

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, photo_id: object) -> bool:
        return photo_id in self._handles
