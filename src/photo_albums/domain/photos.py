"""Domain models for photos and their local resources."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PhotoHandle:
    """Local, revocable reference to a downloaded photo."""

    id: int
    local_ref: str


@dataclass(frozen=True)
class Blob:
    """Binary content behind a local resource reference."""

    content: bytes
    content_type: str


@dataclass(frozen=True)
class PhotoUpload:
    """A file queued for upload to the photo service."""

    filename: str
    content: bytes
    content_type: str
