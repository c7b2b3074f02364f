"""Error taxonomy surfaced to the user-visible layer."""


class PhotoAlbumError(Exception):
    """Base class for failures with a human-readable message."""


class PhotoServiceError(PhotoAlbumError):
    """A call to the photo-storage service failed or returned non-2xx."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        self.detail = detail
        self.status_code = status_code
        if status_code is None:
            super().__init__(detail)
        else:
            super().__init__(f"{detail} (HTTP {status_code})")


class DecodeError(PhotoAlbumError):
    """The server returned an id list that does not follow the list grammar."""

    def __init__(self, raw: str, token: str | None = None) -> None:
        self.raw = raw
        self.token = token
        if token is None:
            message = f"Malformed photo id list: {raw!r}"
        else:
            message = f"Malformed photo id {token!r} in list {raw!r}"
        super().__init__(message)


class FetchError(PhotoAlbumError):
    """A single photo could not be retrieved."""

    def __init__(self, photo_id: int, reason: str) -> None:
        self.photo_id = photo_id
        self.reason = reason
        super().__init__(f"Could not load photo {photo_id}: {reason}")


class AssociationError(PhotoAlbumError):
    """The server rejected a request to link photos to an album."""

    def __init__(self, album_name: str, reason: str) -> None:
        self.album_name = album_name
        self.reason = reason
        super().__init__(f"Failed to link photos to album {album_name!r}: {reason}")


class ReconciliationError(PhotoAlbumError):
    """Photos were linked, but the album's photo list could not be refreshed."""

    def __init__(self, album_name: str, confirmation: str, reason: str) -> None:
        self.album_name = album_name
        self.confirmation = confirmation
        self.reason = reason
        super().__init__(
            f"Photos were linked to album {album_name!r}, but refreshing its "
            f"photo list failed ({reason}). The displayed photos may be stale."
        )


class UnknownPhotoError(PhotoAlbumError):
    """A photo that is not among the current candidates was referenced."""

    def __init__(self, photo_id: int) -> None:
        self.photo_id = photo_id
        super().__init__(f"Photo {photo_id} is not available for selection")


class LinkingBusyError(PhotoAlbumError):
    """A link submission is still in flight."""

    def __init__(self, album_name: str) -> None:
        self.album_name = album_name
        super().__init__(f"Photos are still being linked to album {album_name!r}")


class InvalidUploadError(PhotoAlbumError):
    """A file was rejected before upload."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"{filename} {reason}")


class RevokedHandleError(PhotoAlbumError):
    """A local resource reference was used after revocation."""

    def __init__(self, local_ref: str) -> None:
        self.local_ref = local_ref
        super().__init__(f"Photo resource {local_ref} is no longer available")


class SelectorClosedError(PhotoAlbumError):
    """A selection change arrived while no photo selector is open."""

    def __init__(self) -> None:
        super().__init__("Open the photo selector for an album first")
