"""Tests for the photo selection set."""

import pytest

from photo_albums.domain.errors import UnknownPhotoError
from photo_albums.services.selection import SelectionSet


def test_toggle_is_symmetric() -> None:
    selection = SelectionSet.for_candidates([1, 2, 3])

    assert selection.toggle(2) is True
    assert selection.toggle(3) is True
    assert selection.toggle(2) is False

    assert selection.selected() == [3]


def test_toggle_to_desired_state_is_idempotent() -> None:
    selection = SelectionSet.for_candidates([1, 2])

    selection.toggle(1, selected=True)
    selection.toggle(1, selected=True)
    selection.toggle(2, selected=False)

    assert selection.selected() == [1]
    assert len(selection) == 1
    assert 1 in selection


def test_toggle_rejects_non_candidates() -> None:
    selection = SelectionSet.for_candidates([1])

    with pytest.raises(UnknownPhotoError):
        selection.toggle(7)

    assert selection.selected() == []


def test_remove_candidate_deselects() -> None:
    selection = SelectionSet.for_candidates([1, 2])
    selection.toggle(1)

    selection.remove_candidate(1)

    assert selection.selected() == []
    with pytest.raises(UnknownPhotoError):
        selection.toggle(1)


def test_clear_empties_selection() -> None:
    selection = SelectionSet.for_candidates([1, 2])
    selection.toggle(1)
    selection.toggle(2)

    selection.clear()

    assert not selection
