"""Response models for the local HTTP API."""

from pydantic import BaseModel

from photo_albums.domain.photos import PhotoHandle


class PhotoOut(BaseModel):
    """A displayed photo and where to load its content."""

    id: int
    url: str

    @classmethod
    def from_handle(cls, handle: PhotoHandle) -> "PhotoOut":
        return cls(id=handle.id, url=f"/photos/{handle.id}/content")


class AlbumOut(BaseModel):
    """Album summary."""

    id: int
    name: str
    owner_id: int
    photo_ids: list[int] | None = None


class AlbumViewOut(BaseModel):
    """Photo grid for one album."""

    album: str
    photos: list[PhotoOut]
    zoomed: PhotoOut | None = None


class LinkingOut(BaseModel):
    """Current state of the linking session."""

    status: str
    album: str | None = None
    candidates: list[PhotoOut] = []
    selected: list[int] = []


class LinkOutcomeOut(BaseModel):
    """Result of a link submission."""

    status: str
    stale: bool = False
    message: str
    album: str | None = None
    photo_ids: list[int] = []


class ErrorOut(BaseModel):
    """Error payload shown to the user."""

    error: str
    message: str
