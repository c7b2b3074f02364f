"""Multi-selection of candidate photos for a pending link action."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from photo_albums.domain.errors import UnknownPhotoError


@dataclass
class SelectionSet:
    """Selected photo ids, always a subset of the candidates."""

    candidates: frozenset[int]
    _selected: set[int] = field(default_factory=set, init=False)

    @classmethod
    def for_candidates(cls, photo_ids: Iterable[int]) -> "SelectionSet":
        """Create an empty selection over the given candidate ids."""
        return cls(candidates=frozenset(photo_ids))

    def toggle(self, photo_id: int, selected: bool | None = None) -> bool:
        """Flip or set a photo's membership and return the new membership."""
        if photo_id not in self.candidates:
            raise UnknownPhotoError(photo_id)
        if selected is None:
            selected = photo_id not in self._selected
        if selected:
            self._selected.add(photo_id)
        else:
            self._selected.discard(photo_id)
        return selected

    def selected(self) -> list[int]:
        """Return the selected ids in ascending order."""
        return sorted(self._selected)

    def clear(self) -> None:
        """Deselect everything."""
        self._selected.clear()

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, photo_id: object) -> bool:
        return photo_id in self._selected

    def remove_candidate(self, photo_id: int) -> None:
        """Withdraw a photo from the candidates, deselecting it."""
        self.candidates = self.candidates - {photo_id}
        self._selected.discard(photo_id)
