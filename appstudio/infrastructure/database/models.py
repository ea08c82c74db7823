from datetime import datetime

from sqlmodel import Field, SQLModel

from ...domain.constants import (
    MAX_FILE_PATH_LENGTH,
    MAX_FILENAME_LENGTH,
    MAX_FORMAT_LENGTH,
    MAX_HASH_LENGTH,
    MAX_ID_LENGTH,
    MAX_MIME_TYPE_LENGTH,
)
from ...domain.entities import ProjectImage as DomainProjectImage


class ProjectImage(SQLModel, table=True):  # type: ignore[call-arg]
    """Metadata of an image uploaded to an app. The file itself lives elsewhere."""

    __tablename__: str = "project_images"  # type: ignore[assignment]

    id: str = Field(primary_key=True, max_length=MAX_ID_LENGTH)
    # apps and users are owned by the host application
    app_id: str = Field(index=True, max_length=MAX_ID_LENGTH)
    user_id: str = Field(index=True, max_length=MAX_ID_LENGTH)

    file_path: str = Field(unique=True, max_length=MAX_FILE_PATH_LENGTH)
    original_filename: str = Field(max_length=MAX_FILENAME_LENGTH)
    mime_type: str = Field(max_length=MAX_MIME_TYPE_LENGTH)
    size_bytes: int
    hash: str = Field(index=True, max_length=MAX_HASH_LENGTH)
    width: int | None = None
    height: int | None = None
    format: str = Field(max_length=MAX_FORMAT_LENGTH)

    # Optimization provenance
    is_optimized: bool = False
    original_size_bytes: int | None = None
    compression_ratio: float | None = None

    is_background_image: bool = False

    # Usage tracking
    usage_count: int = 0
    last_referenced_at: datetime | None = Field(default=None, index=True)

    # Soft delete markers
    deleted_at: datetime | None = Field(default=None, index=True)
    deleted_by: str | None = Field(default=None, max_length=MAX_ID_LENGTH)

    uploaded_at: datetime = Field(default_factory=datetime.now, index=True)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def to_domain(self) -> DomainProjectImage:
        """Convert persistence model to domain entity."""
        return DomainProjectImage(
            id=self.id,
            app_id=self.app_id,
            user_id=self.user_id,
            file_path=self.file_path,
            original_filename=self.original_filename,
            mime_type=self.mime_type,
            size_bytes=self.size_bytes,
            hash=self.hash,
            format=self.format,
            width=self.width,
            height=self.height,
            is_optimized=self.is_optimized,
            original_size_bytes=self.original_size_bytes,
            compression_ratio=self.compression_ratio,
            is_background_image=self.is_background_image,
            usage_count=self.usage_count,
            last_referenced_at=self.last_referenced_at,
            deleted_at=self.deleted_at,
            deleted_by=self.deleted_by,
            uploaded_at=self.uploaded_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
