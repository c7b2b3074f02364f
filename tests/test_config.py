"""Tests for configuration helpers."""

import pytest

from photo_albums.config import Settings, normalize_base_url


def test_settings_defaults(settings: Settings) -> None:
    assert settings.request_timeout_seconds == 15
    assert settings.max_upload_bytes == 5 * 1024 * 1024
    assert settings.fetch_all_or_nothing is True


def test_normalize_base_url_strips_trailing_slash() -> None:
    assert normalize_base_url(" https://photos.test/ ") == "https://photos.test"


def test_normalize_base_url_rejects_empty() -> None:
    with pytest.raises(ValueError):
        normalize_base_url("  /")
