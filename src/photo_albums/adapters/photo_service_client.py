"""Photo-storage service API client."""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx

from photo_albums.adapters.credentials import BearerTokenAuth, CredentialStore
from photo_albums.domain.errors import PhotoServiceError
from photo_albums.services.id_lists import encode_id_list

_DEFAULT_CONTENT_TYPE = "application/octet-stream"


class PhotoServiceClient(Protocol):
    """Interface for photo-storage service interactions."""

    async def list_photo_ids(self) -> str:
        """Return the encoded id list of every photo visible to the caller."""

    async def get_photo(self, photo_id: int) -> tuple[bytes, str]:
        """Return a photo's binary payload and its content type."""

    async def list_album_photo_ids(self, album_name: str) -> str:
        """Return the encoded id list of photos linked to an album."""

    async def link_photos(self, album_id: int, photo_ids: list[int]) -> str:
        """Link photos to an album and return the server's confirmation."""

    async def list_albums(self) -> list[dict[str, object]]:
        """Return raw album records."""

    async def upload_photo(
        self, filename: str, content: bytes, content_type: str
    ) -> str:
        """Upload an image and return the server's response text."""

    async def delete_photo(self, photo_id: int) -> str:
        """Delete a photo and return the server's response text."""


@dataclass
class HttpxPhotoServiceClient(PhotoServiceClient):
    """HTTPX-backed photo service client."""

    base_url: str
    http_client: httpx.AsyncClient
    request_timeout: float = 15
    photo_timeout: float = 20

    @classmethod
    def create(
        cls,
        base_url: str,
        credentials: CredentialStore,
        request_timeout: float = 15,
        photo_timeout: float = 20,
    ) -> "HttpxPhotoServiceClient":
        """Create a photo service client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(auth=BearerTokenAuth(credentials)),
            request_timeout=request_timeout,
            photo_timeout=photo_timeout,
        )

    async def list_photo_ids(self) -> str:
        """Fetch the encoded list of all photo ids."""
        response = await self._send("GET", "/photos", timeout=self.request_timeout)
        return response.text

    async def get_photo(self, photo_id: int) -> tuple[bytes, str]:
        """Download one photo."""
        response = await self._send(
            "GET", f"/photos/{photo_id}", timeout=self.photo_timeout
        )
        content_type = response.headers.get("content-type", _DEFAULT_CONTENT_TYPE)
        return response.content, content_type

    async def list_album_photo_ids(self, album_name: str) -> str:
        """Fetch the encoded list of photo ids linked to an album."""
        path = f"/albums/{quote(album_name, safe='')}/photos"
        response = await self._send("GET", path, timeout=self.request_timeout)
        return response.text

    async def link_photos(self, album_id: int, photo_ids: list[int]) -> str:
        """Submit a photo-album link request."""
        response = await self._send(
            "POST",
            f"/albums/{album_id}/photos/link",
            data={"photoIds": encode_id_list(photo_ids)},
            timeout=self.request_timeout,
        )
        return response.text

    async def list_albums(self) -> list[dict[str, object]]:
        """Fetch all albums."""
        response = await self._send("GET", "/albums", timeout=self.request_timeout)
        try:
            payload = response.json()
        except ValueError as exc:
            raise PhotoServiceError("Album list is not valid JSON") from exc
        if not isinstance(payload, list):
            raise PhotoServiceError("Album list is not a JSON array")
        return payload

    async def upload_photo(
        self, filename: str, content: bytes, content_type: str
    ) -> str:
        """Upload one image as multipart form data."""
        response = await self._send(
            "POST",
            "/photos/upload",
            files={"image": (filename, content, content_type)},
            timeout=self.photo_timeout,
        )
        return response.text

    async def delete_photo(self, photo_id: int) -> str:
        """Delete one photo."""
        response = await self._send(
            "POST", f"/photos/delete/{photo_id}", timeout=self.request_timeout
        )
        return response.text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _send(self, method: str, path: str, **kwargs: object) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self.http_client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise PhotoServiceError(f"{method} {path} timed out") from exc
        except httpx.HTTPError as exc:
            raise PhotoServiceError(f"{method} {path} failed: {exc}") from exc
        if response.is_success:
            return response
        detail = response.text.strip() or response.reason_phrase
        raise PhotoServiceError(detail, status_code=response.status_code)
