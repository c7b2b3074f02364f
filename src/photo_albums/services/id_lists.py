"""Decoder for the photo service's bracketed id-list encoding.

The service enumerates photo ids as text such as ``List(3, 7, 9)``: an
optional wrapper token, parentheses, comma-separated base-10 integers and
optional whitespace. Blank input and ``List()`` both mean "no items".
"""

import re
from collections.abc import Iterable

from photo_albums.domain.errors import DecodeError

_WRAPPED = re.compile(
    r"\s*(?:[A-Za-z_][A-Za-z0-9_]*\s*)?\((?P<body>.*)\)\s*", re.DOTALL
)
_INTEGER = re.compile(r"[+-]?[0-9]+")


def decode_id_list(raw: str) -> list[int]:
    """Parse an encoded id list into ids, preserving left-to-right order."""
    if not raw.strip():
        return []

    match = _WRAPPED.fullmatch(raw)
    if match is not None:
        body = match.group("body")
    elif "(" in raw or ")" in raw:
        raise DecodeError(raw)
    else:
        body = raw

    ids: list[int] = []
    for chunk in body.split(","):
        token = chunk.strip()
        if not token:
            continue
        if not _INTEGER.fullmatch(token):
            raise DecodeError(raw, token)
        ids.append(int(token))
    return ids


def encode_id_list(photo_ids: Iterable[int]) -> str:
    """Render ids as the comma-separated form value the link endpoint expects."""
    return ",".join(str(photo_id) for photo_id in photo_ids)
