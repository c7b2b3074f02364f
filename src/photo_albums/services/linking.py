"""State machine for linking selected photos to an album."""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from photo_albums.adapters.photo_service_client import PhotoServiceClient
from photo_albums.domain.albums import Album
from photo_albums.domain.errors import (
    AssociationError,
    DecodeError,
    LinkingBusyError,
    PhotoServiceError,
    ReconciliationError,
    SelectorClosedError,
)
from photo_albums.domain.photos import PhotoHandle
from photo_albums.domain.state import AppState
from photo_albums.services.blobs import BlobStore
from photo_albums.services.fetcher import PhotoFetcher
from photo_albums.services.handles import HandleRegistry
from photo_albums.services.id_lists import decode_id_list
from photo_albums.services.selection import SelectionSet

_logger = logging.getLogger(__name__)


class LinkingStatus(StrEnum):
    """Stages of a linking session."""

    IDLE = "IDLE"
    SELECTOR_OPEN = "SELECTOR_OPEN"
    SUBMITTING = "SUBMITTING"
    RECONCILING = "RECONCILING"


@dataclass(frozen=True)
class LinkResult:
    """Outcome of a successful link and refresh."""

    album: Album
    linked_ids: list[int]
    association: frozenset[int]
    confirmation: str


@dataclass
class LinkingWorkflow:
    """Drives one linking session at a time.

    Idle -> SelectorOpen -> Submitting -> Reconciling -> Idle. After a
    successful link the album's cached association is replaced with the
    list the server reports; the local selection is never merged into it.
    """

    client: PhotoServiceClient
    fetcher: PhotoFetcher
    blob_store: BlobStore
    state: AppState
    status: LinkingStatus = LinkingStatus.IDLE
    target_album: Album | None = None
    selection: SelectionSet | None = None
    _registry: HandleRegistry | None = field(default=None, init=False)
    _candidate_ids: list[int] = field(default_factory=list, init=False)
    _in_flight: set[int] = field(default_factory=set, init=False)

    async def open_selector(self, album: Album) -> list[PhotoHandle]:
        """Load every photo as a candidate for linking to ``album``."""
        if self.status in {LinkingStatus.SUBMITTING, LinkingStatus.RECONCILING}:
            busy = self.target_album.name if self.target_album else album.name
            raise LinkingBusyError(busy)
        if self.status is LinkingStatus.SELECTOR_OPEN or self._registry is not None:
            self.cancel()

        registry = HandleRegistry(self.blob_store)
        self._registry = registry
        try:
            raw = await self.client.list_photo_ids()
            photo_ids = decode_id_list(raw)
            handles = await self.fetcher.fetch_all(photo_ids)
        except BaseException:
            registry.close()
            if self._registry is registry:
                self._registry = None
            raise

        for handle in handles:
            registry.register(handle)
        if registry.closed:
            _logger.info("Selector for album %s closed while loading", album.name)
            return []

        fetched = registry.ids()
        self._candidate_ids = [
            photo_id for photo_id in dict.fromkeys(photo_ids) if photo_id in fetched
        ]
        self.selection = SelectionSet.for_candidates(self._candidate_ids)
        self.target_album = album
        self.status = LinkingStatus.SELECTOR_OPEN
        _logger.info(
            "Selector open for album %s with %s candidates",
            album.name,
            len(self._candidate_ids),
        )
        return self.candidates()

    def candidates(self) -> list[PhotoHandle]:
        """Return candidate handles in the server's listing order."""
        if self._registry is None:
            return []
        handles = (self._registry.get(photo_id) for photo_id in self._candidate_ids)
        return [handle for handle in handles if handle is not None]

    @property
    def registry(self) -> HandleRegistry | None:
        """Registry holding the open selector's candidate handles."""
        return self._registry

    def remove_candidate(self, photo_id: int) -> bool:
        """Withdraw a photo that no longer exists from the open selector."""
        if self._registry is None or photo_id not in self._candidate_ids:
            return False
        self._registry.revoke(photo_id)
        self._candidate_ids.remove(photo_id)
        if self.selection is not None:
            self.selection.remove_candidate(photo_id)
        return True

    def toggle(self, photo_id: int, selected: bool | None = None) -> bool:
        """Change a candidate's membership in the selection."""
        if self.status is not LinkingStatus.SELECTOR_OPEN or self.selection is None:
            raise SelectorClosedError()
        return self.selection.toggle(photo_id, selected)

    async def submit(self) -> LinkResult | None:
        """Link the selection to the target album, then refresh its photo list.

        Returns None without contacting the server when there is nothing to
        submit or a submission for the album is already in flight.
        """
        album = self.target_album
        if (
            self.status is not LinkingStatus.SELECTOR_OPEN
            or album is None
            or self.selection is None
            or not self.selection
            or album.id in self._in_flight
        ):
            return None

        photo_ids = self.selection.selected()
        self._in_flight.add(album.id)
        self.status = LinkingStatus.SUBMITTING
        try:
            try:
                confirmation = await self.client.link_photos(album.id, photo_ids)
            except PhotoServiceError as exc:
                self.status = LinkingStatus.SELECTOR_OPEN
                _logger.info("Linking to album %s rejected: %s", album.name, exc)
                raise AssociationError(album.name, str(exc)) from exc

            self.status = LinkingStatus.RECONCILING
            _logger.info("Linked %s photos to album %s", len(photo_ids), album.name)
            try:
                raw = await self.client.list_album_photo_ids(album.name)
                association = frozenset(decode_id_list(raw))
            except (PhotoServiceError, DecodeError) as exc:
                _logger.warning("Refreshing album %s failed: %s", album.name, exc)
                self._finish()
                raise ReconciliationError(album.name, confirmation, str(exc)) from exc

            self.state.associations[album.name] = association
            self._finish()
            return LinkResult(
                album=album,
                linked_ids=photo_ids,
                association=association,
                confirmation=confirmation,
            )
        finally:
            self._in_flight.discard(album.id)
            if self.status is LinkingStatus.SUBMITTING:
                self.status = LinkingStatus.SELECTOR_OPEN
            elif self.status is LinkingStatus.RECONCILING:
                self._finish()

    def cancel(self) -> bool:
        """Close the selector without submitting; False if a submit is running."""
        if self.status in {LinkingStatus.SUBMITTING, LinkingStatus.RECONCILING}:
            return False
        self._finish()
        return True

    def _finish(self) -> None:
        if self._registry is not None:
            self._registry.close()
        self._registry = None
        self._candidate_ids = []
        if self.selection is not None:
            self.selection.clear()
        self.selection = None
        self.target_album = None
        self.status = LinkingStatus.IDLE
