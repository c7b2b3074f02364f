"""Album listing and the photo grid view."""

import logging
from dataclasses import dataclass, field

from photo_albums.adapters.photo_service_client import PhotoServiceClient
from photo_albums.domain.albums import Album
from photo_albums.domain.photos import PhotoHandle
from photo_albums.domain.state import AppState
from photo_albums.services.blobs import BlobStore
from photo_albums.services.fetcher import PhotoFetcher
from photo_albums.services.handles import HandleRegistry
from photo_albums.services.id_lists import decode_id_list

ALL_PHOTOS = "All Photos"

_logger = logging.getLogger(__name__)


@dataclass
class AlbumView:
    """Photos of one album as shown in the grid, with zoom navigation."""

    name: str
    photo_ids: list[int]
    registry: HandleRegistry
    zoomed_index: int | None = None

    def handles(self) -> list[PhotoHandle]:
        """Return live handles in display order."""
        handles = (self.registry.get(photo_id) for photo_id in self.photo_ids)
        return [handle for handle in handles if handle is not None]

    def zoom(self, index: int) -> PhotoHandle:
        """Zoom into the photo at ``index``."""
        if not 0 <= index < len(self.photo_ids):
            raise IndexError(f"No photo at position {index}")
        self.zoomed_index = index
        return self._zoomed()

    def next_photo(self) -> PhotoHandle | None:
        """Move the zoom to the next photo, wrapping around."""
        if self.zoomed_index is None or not self.photo_ids:
            return None
        self.zoomed_index = (self.zoomed_index + 1) % len(self.photo_ids)
        return self._zoomed()

    def previous_photo(self) -> PhotoHandle | None:
        """Move the zoom to the previous photo, wrapping around."""
        if self.zoomed_index is None or not self.photo_ids:
            return None
        self.zoomed_index = (self.zoomed_index - 1) % len(self.photo_ids)
        return self._zoomed()

    def close_zoom(self) -> None:
        """Leave the zoomed view."""
        self.zoomed_index = None

    def zoomed_handle(self) -> PhotoHandle | None:
        """Return the zoomed photo's handle, if zoomed."""
        if self.zoomed_index is None:
            return None
        return self._zoomed()

    def _zoomed(self) -> PhotoHandle:
        photo_id = self.photo_ids[self.zoomed_index or 0]
        handle = self.registry.get(photo_id)
        if handle is None:
            raise LookupError(f"Photo {photo_id} is no longer displayed")
        return handle


@dataclass
class AlbumBrowser:
    """Loads albums and owns the currently displayed album view."""

    client: PhotoServiceClient
    fetcher: PhotoFetcher
    blob_store: BlobStore
    state: AppState
    current_view: AlbumView | None = None
    _loading: list[HandleRegistry] = field(default_factory=list, init=False)

    async def refresh_albums(self) -> list[Album]:
        """Reload the album list from the service."""
        records = await self.client.list_albums()
        albums = [Album.model_validate(record) for record in records]
        self.state.replace_albums(albums)
        return albums

    async def open_album(self, name: str | None = None) -> AlbumView | None:
        """Show an album's photos, or every photo when ``name`` is None.

        Returns None when the view was closed or replaced before loading
        finished; the late handles are released instead of displayed.
        """
        self.close_view()
        registry = HandleRegistry(self.blob_store)
        self._loading.append(registry)
        try:
            if name is None or name == ALL_PHOTOS:
                raw = await self.client.list_photo_ids()
            else:
                raw = await self.client.list_album_photo_ids(name)
            photo_ids = list(dict.fromkeys(decode_id_list(raw)))
            handles = await self.fetcher.fetch_all(photo_ids)
        except BaseException:
            registry.close()
            raise
        finally:
            self._loading.remove(registry)

        for handle in handles:
            registry.register(handle)
        if registry.closed:
            _logger.info("Discarded photos for %s: view closed", name or ALL_PHOTOS)
            return None

        if name is not None and name != ALL_PHOTOS:
            self.state.associations[name] = frozenset(photo_ids)
        fetched = registry.ids()
        self.current_view = AlbumView(
            name=name or ALL_PHOTOS,
            photo_ids=[photo_id for photo_id in photo_ids if photo_id in fetched],
            registry=registry,
        )
        return self.current_view

    def close_view(self) -> None:
        """Tear down the displayed view and any view still loading."""
        for registry in list(self._loading):
            registry.close()
        if self.current_view is not None:
            self.current_view.registry.close()
        self.current_view = None

    def remove_photo(self, photo_id: int) -> bool:
        """Drop a photo from the displayed view, releasing its handle."""
        view = self.current_view
        if view is None or photo_id not in view.photo_ids:
            return False
        view.registry.revoke(photo_id)
        view.photo_ids = [pid for pid in view.photo_ids if pid != photo_id]
        view.close_zoom()
        return True
