"""Concurrent photo downloads into local handles."""

import asyncio
import logging
from dataclasses import dataclass

from photo_albums.adapters.photo_service_client import PhotoServiceClient
from photo_albums.domain.errors import FetchError, PhotoServiceError
from photo_albums.domain.photos import PhotoHandle
from photo_albums.services.blobs import BlobStore

_logger = logging.getLogger(__name__)


@dataclass
class PhotoFetcher:
    """Materializes photos as local handles, one download per id.

    With ``all_or_nothing`` set, a single failed download fails the whole
    batch and every blob the batch allocated is released before the error
    propagates. Otherwise failed photos are logged and left out.
    """

    client: PhotoServiceClient
    blob_store: BlobStore
    all_or_nothing: bool = True

    async def fetch_all(self, photo_ids: list[int]) -> list[PhotoHandle]:
        """Download every photo concurrently and return their handles."""
        unique_ids = list(dict.fromkeys(photo_ids))
        if not unique_ids:
            return []

        _logger.info("Fetching %s photos", len(unique_ids))
        results = await asyncio.gather(
            *(self._fetch_one(photo_id) for photo_id in unique_ids),
            return_exceptions=True,
        )

        handles: list[PhotoHandle] = []
        failures: list[FetchError] = []
        unexpected: list[BaseException] = []
        for photo_id, result in zip(unique_ids, results, strict=True):
            if isinstance(result, PhotoHandle):
                handles.append(result)
            elif isinstance(result, FetchError):
                _logger.warning("Photo %s failed: %s", photo_id, result.reason)
                failures.append(result)
            else:
                _logger.error("Photo %s failed unexpectedly: %r", photo_id, result)
                unexpected.append(result)

        if unexpected:
            self._release(handles)
            raise unexpected[0]
        if failures and self.all_or_nothing:
            self._release(handles)
            raise failures[0]
        _logger.info("Fetched %s of %s photos", len(handles), len(unique_ids))
        return handles

    async def _fetch_one(self, photo_id: int) -> PhotoHandle:
        try:
            content, content_type = await self.client.get_photo(photo_id)
        except PhotoServiceError as exc:
            raise FetchError(photo_id, str(exc)) from exc
        local_ref = await self.blob_store.create_blob(content, content_type)
        return PhotoHandle(id=photo_id, local_ref=local_ref)

    def _release(self, handles: list[PhotoHandle]) -> None:
        for handle in handles:
            self.blob_store.revoke(handle.local_ref)
