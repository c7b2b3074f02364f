"""Tests for the id-list decoder."""

import pytest

from photo_albums.domain.errors import DecodeError
from photo_albums.services.id_lists import decode_id_list, encode_id_list


def test_decode_wrapped_list_trims_whitespace() -> None:
    assert decode_id_list("List(3, 7,9)") == [3, 7, 9]


def test_decode_empty_inputs() -> None:
    assert decode_id_list("") == []
    assert decode_id_list("   ") == []
    assert decode_id_list("List()") == []


def test_decode_drops_empty_tokens() -> None:
    assert decode_id_list("List(4,, 5, )") == [4, 5]


def test_decode_accepts_bare_and_parenthesized_lists() -> None:
    assert decode_id_list("1,2,3") == [1, 2, 3]
    assert decode_id_list("(10, 20)") == [10, 20]
    assert decode_id_list(" Vector( 8 ) \n") == [8]


def test_decode_preserves_order_and_duplicates() -> None:
    assert decode_id_list("List(9, 1, 9)") == [9, 1, 9]


def test_decode_rejects_non_integer_token() -> None:
    with pytest.raises(DecodeError) as excinfo:
        decode_id_list("List(3, a, 9)")

    assert excinfo.value.token == "a"
    assert "'a'" in str(excinfo.value)


@pytest.mark.parametrize(
    "raw",
    ["List(1, 2", "List 1, 2)", "List(1)(2)", "List(1.5)", "List(1 2)", "List"],
)
def test_decode_rejects_malformed_lists(raw: str) -> None:
    with pytest.raises(DecodeError):
        decode_id_list(raw)


def test_encode_id_list_joins_with_commas() -> None:
    assert encode_id_list([2, 3]) == "2,3"
    assert encode_id_list([]) == ""
