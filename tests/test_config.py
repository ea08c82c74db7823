"""Tests for settings, database URL handling and upload metadata validation."""

import dataclasses

import pytest
from pydantic import ValidationError as PydanticValidationError

from appstudio.config import Settings
from appstudio.domain.constants import DEFAULT_RETENTION_DAYS
from appstudio.domain.entities import ImageUploadMetadata, ProjectImage, StorageStats
from appstudio.domain.exceptions import ValidationError
from appstudio.infrastructure.database.database import to_async_url


def test_default_settings(monkeypatch):
    monkeypatch.delenv("IMAGE_RETENTION_DAYS", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DB_NAME", raising=False)

    config = Settings(_env_file=None)

    assert config.image_retention_days == DEFAULT_RETENTION_DAYS
    assert config.effective_database_url == "sqlite:///./appstudio.db"


def test_db_name_changes_default_sqlite_file(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DB_NAME", "preview")

    config = Settings(_env_file=None)

    assert config.effective_database_url == "sqlite:///./preview.db"


def test_explicit_database_url_wins(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/apps")
    monkeypatch.setenv("DB_NAME", "ignored")

    config = Settings(_env_file=None)

    assert config.effective_database_url == "postgresql://u:p@db:5432/apps"


def test_environment_overrides_retention(monkeypatch):
    monkeypatch.setenv("IMAGE_RETENTION_DAYS", "7")

    assert Settings(_env_file=None).image_retention_days == 7


def test_negative_retention_rejected(monkeypatch):
    monkeypatch.setenv("IMAGE_RETENTION_DAYS", "-1")

    with pytest.raises(PydanticValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("sqlite:///./appstudio.db", "sqlite+aiosqlite:///./appstudio.db"),
        ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
        ("postgresql://u:p@h:5432/db", "postgresql+asyncpg://u:p@h:5432/db"),
        ("postgresql+asyncpg://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
    ],
)
def test_to_async_url(url, expected):
    assert to_async_url(url) == expected


def test_to_async_url_rejects_unknown_backend():
    with pytest.raises(ValueError):
        to_async_url("mysql://u:p@h/db")


def _metadata(**overrides) -> ImageUploadMetadata:
    fields = {
        "app_id": "app-1",
        "user_id": "user-1",
        "file_path": "app-1/logo.png",
        "original_filename": "logo.png",
        "mime_type": "image/png",
        "size_bytes": 2048,
        "hash": "abc123",
        "format": "png",
    }
    fields.update(overrides)
    return ImageUploadMetadata(**fields)


def test_valid_metadata():
    metadata = _metadata(width=640, height=480, size_bytes=0)

    assert metadata.width == 640
    assert metadata.is_optimized is False


@pytest.mark.parametrize(
    "overrides",
    [
        {"app_id": ""},
        {"user_id": "   "},
        {"file_path": ""},
        {"file_path": "x" * 1025},
        {"original_filename": ""},
        {"mime_type": ""},
        {"hash": ""},
        {"format": ""},
        {"size_bytes": -1},
        {"original_size_bytes": -5},
        {"width": 0},
        {"height": -10},
    ],
)
def test_invalid_metadata_rejected(overrides):
    with pytest.raises(ValidationError):
        _metadata(**overrides)


def test_storage_stats_starts_empty():
    stats = StorageStats()

    assert stats.total_images == 0
    assert stats.total_size == stats.active_size + stats.deleted_size


def test_project_image_is_immutable():
    image = ProjectImage(
        id="img-1",
        app_id="app-1",
        user_id="user-1",
        file_path="app-1/logo.png",
        original_filename="logo.png",
        mime_type="image/png",
        size_bytes=2048,
        hash="abc123",
        format="png",
    )

    with pytest.raises(dataclasses.FrozenInstanceError):
        image.usage_count = 99  # type: ignore[misc]

    stats = StorageStats()
    stats.add(image)
    assert stats.active_images == 1
