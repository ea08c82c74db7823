"""Pure domain entities without infrastructure dependencies."""

from dataclasses import dataclass
from datetime import datetime

from .constants import (
    MAX_FILE_PATH_LENGTH,
    MAX_FILENAME_LENGTH,
    MAX_HASH_LENGTH,
    MAX_MIME_TYPE_LENGTH,
)
from .exceptions import ValidationError


def _require_text(value: str, field: str, max_length: int | None = None) -> None:
    if not value or not value.strip():
        raise ValidationError(f"Image {field} cannot be empty")
    if max_length is not None and len(value) > max_length:
        raise ValidationError(
            f"Image {field} cannot be longer than {max_length} characters"
        )


@dataclass
class ImageUploadMetadata:
    """Metadata describing an uploaded image before it is stored."""

    app_id: str
    user_id: str
    file_path: str
    original_filename: str
    mime_type: str
    size_bytes: int
    hash: str
    format: str
    width: int | None = None
    height: int | None = None
    is_optimized: bool = False
    original_size_bytes: int | None = None
    compression_ratio: float | None = None
    is_background_image: bool = False

    def __post_init__(self):
        """Validate metadata after initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate upload metadata business rules."""
        _require_text(self.app_id, "app id")
        _require_text(self.user_id, "user id")
        _require_text(self.file_path, "file path", MAX_FILE_PATH_LENGTH)
        _require_text(self.original_filename, "filename", MAX_FILENAME_LENGTH)
        _require_text(self.mime_type, "mime type", MAX_MIME_TYPE_LENGTH)
        _require_text(self.hash, "hash", MAX_HASH_LENGTH)
        _require_text(self.format, "format")

        if self.size_bytes < 0:
            raise ValidationError("Image size cannot be negative")
        if self.original_size_bytes is not None and self.original_size_bytes < 0:
            raise ValidationError("Original image size cannot be negative")

        for name, dimension in (("width", self.width), ("height", self.height)):
            if dimension is not None and dimension <= 0:
                raise ValidationError(f"Image {name} must be positive")


@dataclass
class ImageSearchFilters:
    """Deletion-state filters for listing the images of an app.

    ``only_deleted`` takes precedence over ``include_deleted``.
    """

    include_deleted: bool = False
    only_deleted: bool = False
    user_id: str | None = None


@dataclass(frozen=True)
class ProjectImage:
    """Stored image metadata as seen by callers of the metadata service."""

    id: str
    app_id: str
    user_id: str
    file_path: str
    original_filename: str
    mime_type: str
    size_bytes: int
    hash: str
    format: str
    width: int | None = None
    height: int | None = None
    is_optimized: bool = False
    original_size_bytes: int | None = None
    compression_ratio: float | None = None
    is_background_image: bool = False
    usage_count: int = 0
    last_referenced_at: datetime | None = None
    deleted_at: datetime | None = None
    deleted_by: str | None = None
    uploaded_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_deleted(self) -> bool:
        """Check if image is soft deleted."""
        return self.deleted_at is not None


@dataclass
class StorageStats:
    """Image counts and byte totals for one app."""

    total_images: int = 0
    active_images: int = 0
    deleted_images: int = 0
    total_size: int = 0
    active_size: int = 0
    deleted_size: int = 0

    def add(self, image: ProjectImage) -> None:
        """Account for one image in the totals."""
        self.total_images += 1
        self.total_size += image.size_bytes

        if image.is_deleted():
            self.deleted_images += 1
            self.deleted_size += image.size_bytes
        else:
            self.active_images += 1
            self.active_size += image.size_bytes
