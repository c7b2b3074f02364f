"""Tests for blob store implementations."""

import asyncio
from pathlib import Path

import pytest

from photo_albums.adapters.tempdir_blob_store import TempDirBlobStore
from photo_albums.domain.errors import RevokedHandleError
from photo_albums.services.blobs import InMemoryBlobStore


def test_in_memory_blob_store_round_trip() -> None:
    store = InMemoryBlobStore()

    ref = asyncio.run(store.create_blob(b"bytes", "image/png"))

    assert ref.startswith("blob:")
    blob = store.read(ref)
    assert blob.content == b"bytes"
    assert blob.content_type == "image/png"
    store.revoke(ref)
    store.revoke(ref)
    assert store.live_refs() == set()


def test_tempdir_blob_store_revoke_deletes_file(tmp_path: Path) -> None:
    store = TempDirBlobStore.create(str(tmp_path))

    ref = asyncio.run(store.create_blob(b"jpeg-bytes", "image/jpeg"))
    files = list(store.root.iterdir())

    assert len(files) == 1
    assert store.read(ref).content == b"jpeg-bytes"
    assert store.live_refs() == {ref}

    store.revoke(ref)

    assert list(store.root.iterdir()) == []
    with pytest.raises(RevokedHandleError):
        store.read(ref)


def test_tempdir_blob_store_close_removes_directory(tmp_path: Path) -> None:
    store = TempDirBlobStore.create(str(tmp_path))
    asyncio.run(store.create_blob(b"a", "image/png"))
    asyncio.run(store.create_blob(b"b", "image/png"))

    store.close()

    assert not store.root.exists()
    assert store.live_refs() == set()
