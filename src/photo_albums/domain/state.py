"""Application state shared by the browsing and linking services."""

from dataclasses import dataclass, field

from photo_albums.domain.albums import Album


@dataclass
class AppState:
    """Session-scoped view state owned by the application container."""

    albums: list[Album] = field(default_factory=list)
    associations: dict[str, frozenset[int]] = field(default_factory=dict)

    def album_by_id(self, album_id: int) -> Album | None:
        """Return the cached album with the given id, if any."""
        for album in self.albums:
            if album.id == album_id:
                return album
        return None

    def album_by_name(self, name: str) -> Album | None:
        """Return the cached album with the given name, if any."""
        for album in self.albums:
            if album.name == name:
                return album
        return None

    def replace_albums(self, albums: list[Album]) -> None:
        """Replace the album list and drop associations for vanished albums."""
        self.albums = list(albums)
        names = {album.name for album in albums}
        for name in list(self.associations):
            if name not in names:
                del self.associations[name]
