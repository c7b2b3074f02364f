"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from photo_albums.adapters.credentials import SessionCredentialStore
from photo_albums.adapters.photo_service_client import PhotoServiceClient
from photo_albums.config import Settings
from photo_albums.containers import AppContainer
from photo_albums.domain.errors import PhotoServiceError
from photo_albums.domain.state import AppState
from photo_albums.services.albums import AlbumBrowser
from photo_albums.services.blobs import InMemoryBlobStore
from photo_albums.services.fetcher import PhotoFetcher
from photo_albums.services.linking import LinkingWorkflow
from photo_albums.services.photos import PhotoLibraryService


@dataclass
class FakePhotoServiceClient(PhotoServiceClient):
    """In-memory photo service that records every call."""

    photo_list: str = "List(1, 2, 3)"
    photos: dict[int, bytes] = field(
        default_factory=lambda: {
            1: b"photo-1",
            2: b"photo-2",
            3: b"photo-3",
        }
    )
    album_lists: dict[str, str] = field(default_factory=dict)
    albums: list[dict[str, object]] = field(
        default_factory=lambda: [
            {"id": 1, "name": "Vacation", "ownerId": 1},
            {"id": 2, "name": "Family", "ownerId": 1},
        ]
    )
    delays: dict[int, float] = field(default_factory=dict)
    failing_photo_ids: set[int] = field(default_factory=set)
    link_error: Exception | None = None
    album_list_error: Exception | None = None
    link_confirmation: str = "Photos linked successfully"
    photo_calls: list[int] = field(default_factory=list)
    link_calls: list[tuple[int, list[int]]] = field(default_factory=list)
    album_list_calls: list[str] = field(default_factory=list)
    uploads: list[tuple[str, bytes, str]] = field(default_factory=list)
    deleted: list[int] = field(default_factory=list)

    async def list_photo_ids(self) -> str:
        return self.photo_list

    async def get_photo(self, photo_id: int) -> tuple[bytes, str]:
        self.photo_calls.append(photo_id)
        await asyncio.sleep(self.delays.get(photo_id, 0))
        if photo_id in self.failing_photo_ids or photo_id not in self.photos:
            raise PhotoServiceError("Photo not found", status_code=404)
        return self.photos[photo_id], "image/jpeg"

    async def list_album_photo_ids(self, album_name: str) -> str:
        self.album_list_calls.append(album_name)
        await asyncio.sleep(0)
        if self.album_list_error is not None:
            raise self.album_list_error
        return self.album_lists.get(album_name, "List()")

    async def link_photos(self, album_id: int, photo_ids: list[int]) -> str:
        self.link_calls.append((album_id, list(photo_ids)))
        await asyncio.sleep(0)
        if self.link_error is not None:
            raise self.link_error
        return self.link_confirmation

    async def list_albums(self) -> list[dict[str, object]]:
        return list(self.albums)

    async def upload_photo(
        self, filename: str, content: bytes, content_type: str
    ) -> str:
        self.uploads.append((filename, content, content_type))
        return f"Uploaded {filename}"

    async def delete_photo(self, photo_id: int) -> str:
        self.deleted.append(photo_id)
        return f"Photo {photo_id} deleted"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        admin_token="admin-token",
        photo_api_base_url="https://photos.test",
        photo_api_token="session-token",
    )


@pytest.fixture
def photo_client() -> FakePhotoServiceClient:
    return FakePhotoServiceClient()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def app_state() -> AppState:
    return AppState()


@pytest.fixture
def fetcher(
    photo_client: FakePhotoServiceClient, blob_store: InMemoryBlobStore
) -> PhotoFetcher:
    return PhotoFetcher(client=photo_client, blob_store=blob_store)


@pytest.fixture
def workflow(
    photo_client: FakePhotoServiceClient,
    fetcher: PhotoFetcher,
    blob_store: InMemoryBlobStore,
    app_state: AppState,
) -> LinkingWorkflow:
    return LinkingWorkflow(
        client=photo_client,
        fetcher=fetcher,
        blob_store=blob_store,
        state=app_state,
    )


@pytest.fixture
def browser(
    photo_client: FakePhotoServiceClient,
    fetcher: PhotoFetcher,
    blob_store: InMemoryBlobStore,
    app_state: AppState,
) -> AlbumBrowser:
    return AlbumBrowser(
        client=photo_client,
        fetcher=fetcher,
        blob_store=blob_store,
        state=app_state,
    )


@pytest.fixture
def container(
    settings: Settings,
    app_state: AppState,
    photo_client: FakePhotoServiceClient,
    blob_store: InMemoryBlobStore,
    browser: AlbumBrowser,
    workflow: LinkingWorkflow,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        state=app_state,
        credentials=SessionCredentialStore(token=settings.photo_api_token),
        photo_client=photo_client,
        blob_store=blob_store,
        album_browser=browser,
        linking_workflow=workflow,
        photo_library=PhotoLibraryService(
            client=photo_client, max_upload_bytes=settings.max_upload_bytes
        ),
        close_resources=close_resources,
    )
