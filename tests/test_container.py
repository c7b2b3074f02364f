"""Tests for container wiring."""

import asyncio
from pathlib import Path

from photo_albums.adapters.tempdir_blob_store import TempDirBlobStore
from photo_albums.config import Settings
from photo_albums.containers import build_container


def test_build_container_creates_services(settings: Settings, tmp_path: Path) -> None:
    settings.blob_dir = str(tmp_path)
    container = build_container(settings)

    assert container.linking_workflow.state is container.state
    assert container.album_browser.state is container.state
    assert container.credentials.get_token() == "session-token"
    assert isinstance(container.blob_store, TempDirBlobStore)
    blob_root = container.blob_store.root
    assert blob_root.exists()

    asyncio.run(container.close_resources())

    assert not blob_root.exists()
