"""Photo upload and deletion for administrators."""

import asyncio
import logging
from dataclasses import dataclass

from photo_albums.adapters.photo_service_client import PhotoServiceClient
from photo_albums.domain.errors import InvalidUploadError
from photo_albums.domain.photos import PhotoUpload

_logger = logging.getLogger(__name__)


@dataclass
class PhotoLibraryService:
    """Uploads new photos and deletes existing ones."""

    client: PhotoServiceClient
    max_upload_bytes: int = 5 * 1024 * 1024

    def validate(self, upload: PhotoUpload) -> None:
        """Reject files that are not images or exceed the size limit."""
        if not upload.content_type.startswith("image/"):
            raise InvalidUploadError(upload.filename, "is not a valid image file.")
        if len(upload.content) > self.max_upload_bytes:
            limit_mb = self.max_upload_bytes / (1024 * 1024)
            raise InvalidUploadError(
                upload.filename, f"is too large. Maximum size is {limit_mb:g}MB."
            )

    async def upload_photos(self, uploads: list[PhotoUpload]) -> list[str]:
        """Validate every file, then upload them concurrently."""
        for upload in uploads:
            self.validate(upload)
        responses = await asyncio.gather(
            *(
                self.client.upload_photo(
                    upload.filename, upload.content, upload.content_type
                )
                for upload in uploads
            )
        )
        _logger.info("Uploaded %s photos", len(uploads))
        return list(responses)

    async def delete_photo(self, photo_id: int) -> str:
        """Delete a photo on the service."""
        message = await self.client.delete_photo(photo_id)
        _logger.info("Deleted photo %s", photo_id)
        return message
