"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from photo_albums.adapters.credentials import SessionCredentialStore
from photo_albums.adapters.photo_service_client import (
    HttpxPhotoServiceClient,
    PhotoServiceClient,
)
from photo_albums.adapters.tempdir_blob_store import TempDirBlobStore
from photo_albums.config import Settings, normalize_base_url
from photo_albums.domain.state import AppState
from photo_albums.services.albums import AlbumBrowser
from photo_albums.services.blobs import BlobStore
from photo_albums.services.fetcher import PhotoFetcher
from photo_albums.services.linking import LinkingWorkflow
from photo_albums.services.photos import PhotoLibraryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies and session state."""

    settings: Settings
    state: AppState
    credentials: SessionCredentialStore
    photo_client: PhotoServiceClient
    blob_store: BlobStore
    album_browser: AlbumBrowser
    linking_workflow: LinkingWorkflow
    photo_library: PhotoLibraryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    state = AppState()
    credentials = SessionCredentialStore(token=resolved_settings.photo_api_token)
    photo_client = HttpxPhotoServiceClient.create(
        base_url=normalize_base_url(resolved_settings.photo_api_base_url),
        credentials=credentials,
        request_timeout=resolved_settings.request_timeout_seconds,
        photo_timeout=resolved_settings.photo_timeout_seconds,
    )
    blob_store = TempDirBlobStore.create(resolved_settings.blob_dir)
    fetcher = PhotoFetcher(
        client=photo_client,
        blob_store=blob_store,
        all_or_nothing=resolved_settings.fetch_all_or_nothing,
    )
    album_browser = AlbumBrowser(
        client=photo_client,
        fetcher=fetcher,
        blob_store=blob_store,
        state=state,
    )
    linking_workflow = LinkingWorkflow(
        client=photo_client,
        fetcher=fetcher,
        blob_store=blob_store,
        state=state,
    )
    photo_library = PhotoLibraryService(
        client=photo_client,
        max_upload_bytes=resolved_settings.max_upload_bytes,
    )

    async def close_resources() -> None:
        album_browser.close_view()
        linking_workflow.cancel()
        await photo_client.close()
        blob_store.close()

    return AppContainer(
        settings=resolved_settings,
        state=state,
        credentials=credentials,
        photo_client=photo_client,
        blob_store=blob_store,
        album_browser=album_browser,
        linking_workflow=linking_workflow,
        photo_library=photo_library,
        close_resources=close_resources,
    )
