"""Metadata service for the images uploaded to an app.

Every operation issues its own statement(s) and commits before returning.
Lookups signal absence with ``None``; storage errors are rolled back and
re-raised unchanged. The image files themselves are never touched here:
operations that remove rows return them so the caller can delete the blobs.
"""

import uuid
from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Any, Final

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable
from sqlmodel import col, select

from ..domain.constants import DEFAULT_RETENTION_DAYS
from ..domain.entities import ImageSearchFilters, ImageUploadMetadata, StorageStats
from ..domain.entities import ProjectImage as DomainProjectImage
from ..domain.exceptions import ValidationError
from ..infrastructure.database.models import ProjectImage
from ..logging_config import get_logger
from ..logging_utils import log_database_operation, log_user_action

logger: Final = get_logger(__name__)

_TABLE: Final = "project_images"


class ImageMetadataService:
    """CRUD operations on the ``project_images`` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _write(
        self, operation: str, *statements: Executable, **context: Any
    ) -> None:
        """Execute statements and commit them as one transaction."""
        try:
            for statement in statements:
                await self.session.execute(statement)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            log_database_operation(
                operation=operation,
                table=_TABLE,
                success=False,
                error=str(e),
                **context,
            )
            raise

        log_database_operation(
            operation=operation, table=_TABLE, success=True, **context
        )

    async def create_image(self, metadata: ImageUploadMetadata) -> DomainProjectImage:
        """Store metadata for a new image.

        No duplicate check is made; call ``find_by_hash`` first to de-duplicate.
        """
        image_id = str(uuid.uuid4())
        now = datetime.now()
        logger.debug(
            "Creating image metadata", image_id=image_id, app_id=metadata.app_id
        )

        image = ProjectImage(
            id=image_id,
            app_id=metadata.app_id,
            user_id=metadata.user_id,
            file_path=metadata.file_path,
            original_filename=metadata.original_filename,
            mime_type=metadata.mime_type,
            size_bytes=metadata.size_bytes,
            hash=metadata.hash,
            width=metadata.width,
            height=metadata.height,
            format=metadata.format,
            is_optimized=metadata.is_optimized,
            original_size_bytes=metadata.original_size_bytes,
            compression_ratio=metadata.compression_ratio,
            is_background_image=metadata.is_background_image,
            usage_count=0,
            last_referenced_at=now,
            uploaded_at=now,
            created_at=now,
            updated_at=now,
        )

        self.session.add(image)
        await self._write("create", image_id=image_id, app_id=metadata.app_id)
        await self.session.refresh(image)

        logger.info(
            "Image metadata created", image_id=image_id, file_path=metadata.file_path
        )
        return image.to_domain()

    async def find_by_hash(self, hash: str, app_id: str) -> DomainProjectImage | None:
        """Find the active image of an app with the given content hash."""
        statement: Final = select(ProjectImage).where(
            ProjectImage.hash == hash,
            ProjectImage.app_id == app_id,
            col(ProjectImage.deleted_at).is_(None),
        )
        result = await self.session.execute(statement)
        image = result.scalars().first()
        return image.to_domain() if image else None

    async def get_by_id(self, image_id: str) -> DomainProjectImage | None:
        """Get an image by ID, whether or not it is soft deleted."""
        statement: Final = select(ProjectImage).where(ProjectImage.id == image_id)
        result = await self.session.execute(statement)
        image = result.scalars().first()
        return image.to_domain() if image else None

    async def get_images_by_app(
        self, app_id: str, filters: ImageSearchFilters | None = None
    ) -> list[DomainProjectImage]:
        """List the images of an app, newest upload first.

        Active images only by default; ``include_deleted`` adds soft deleted
        ones and ``only_deleted`` restricts to them.
        """
        filters = filters or ImageSearchFilters()

        statement = select(ProjectImage).where(ProjectImage.app_id == app_id)
        if filters.only_deleted:
            statement = statement.where(col(ProjectImage.deleted_at).is_not(None))
        elif not filters.include_deleted:
            statement = statement.where(col(ProjectImage.deleted_at).is_(None))
        if filters.user_id is not None:
            statement = statement.where(ProjectImage.user_id == filters.user_id)
        statement = statement.order_by(col(ProjectImage.uploaded_at).desc())

        result = await self.session.execute(statement)
        return [image.to_domain() for image in result.scalars().all()]

    async def update_usage(self, image_id: str) -> None:
        """Record that an image was referenced once more."""
        now = datetime.now()
        await self._write(
            "update_usage",
            update(ProjectImage)
            .where(col(ProjectImage.id) == image_id)
            .values(
                usage_count=col(ProjectImage.usage_count) + 1,
                last_referenced_at=now,
                updated_at=now,
            ),
            image_id=image_id,
        )

        logger.info("Image usage updated", image_id=image_id)

    async def soft_delete(self, image_id: str, user_id: str) -> None:
        """Mark an image as deleted by a user."""
        logger.debug("Soft deleting image", image_id=image_id, user_id=user_id)

        now = datetime.now()
        await self._write(
            "soft_delete",
            update(ProjectImage)
            .where(col(ProjectImage.id) == image_id)
            .values(deleted_at=now, deleted_by=user_id, updated_at=now),
            image_id=image_id,
        )

        log_user_action(action="soft_delete_image", user=user_id, image_id=image_id)
        logger.info("Image soft deleted", image_id=image_id, user_id=user_id)

    async def restore(self, image_id: str) -> None:
        """Restore a soft deleted image."""
        logger.debug("Restoring image", image_id=image_id)

        await self._write(
            "restore",
            update(ProjectImage)
            .where(col(ProjectImage.id) == image_id)
            .values(deleted_at=None, deleted_by=None, updated_at=datetime.now()),
            image_id=image_id,
        )

        logger.info("Image restored", image_id=image_id)

    async def purge_expired(
        self, retention_days: int = DEFAULT_RETENTION_DAYS
    ) -> list[DomainProjectImage]:
        """Permanently delete images soft deleted before the retention window.

        Args:
            retention_days: How long a soft deleted image is kept

        Returns:
            The removed images, so their files can be deleted from storage

        Raises:
            ValidationError: If retention_days is negative
        """
        if retention_days < 0:
            raise ValidationError("Retention days cannot be negative")

        cutoff = datetime.now() - timedelta(days=retention_days)
        logger.debug("Purging expired images", cutoff=cutoff.isoformat())

        expired_filter: Final = (
            col(ProjectImage.deleted_at).is_not(None),
            col(ProjectImage.deleted_at) <= cutoff,
        )
        result = await self.session.execute(
            select(ProjectImage).where(*expired_filter)
        )
        expired = [image.to_domain() for image in result.scalars().all()]

        if expired:
            ids = [image.id for image in expired]
            await self._write(
                "purge",
                # rows restored since the select are left alone
                delete(ProjectImage).where(
                    col(ProjectImage.id).in_(ids), *expired_filter
                ),
                count=len(ids),
            )
            remaining = await self.session.execute(
                select(ProjectImage.id).where(col(ProjectImage.id).in_(ids))
            )
            kept = set(remaining.scalars().all())
            if kept:
                logger.info("Skipped images restored during purge", count=len(kept))
                expired = [image for image in expired if image.id not in kept]
            logger.info("Expired images purged", count=len(expired))

        return expired

    async def batch_soft_delete(self, image_ids: Sequence[str], user_id: str) -> int:
        """Soft delete several images in one statement.

        Returns:
            Number of IDs submitted
        """
        if not image_ids:
            return 0

        now = datetime.now()
        await self._write(
            "batch_soft_delete",
            update(ProjectImage)
            .where(col(ProjectImage.id).in_(list(image_ids)))
            .values(deleted_at=now, deleted_by=user_id, updated_at=now),
            count=len(image_ids),
        )

        log_user_action(
            action="batch_soft_delete_images", user=user_id, count=len(image_ids)
        )
        logger.info("Batch soft delete", count=len(image_ids), user_id=user_id)
        return len(image_ids)

    async def batch_restore(self, image_ids: Sequence[str]) -> int:
        """Restore several soft deleted images in one statement.

        Returns:
            Number of IDs submitted
        """
        if not image_ids:
            return 0

        await self._write(
            "batch_restore",
            update(ProjectImage)
            .where(col(ProjectImage.id).in_(list(image_ids)))
            .values(deleted_at=None, deleted_by=None, updated_at=datetime.now()),
            count=len(image_ids),
        )

        logger.info("Batch restore", count=len(image_ids))
        return len(image_ids)

    async def batch_permanent_delete(
        self, image_ids: Sequence[str]
    ) -> list[DomainProjectImage]:
        """Permanently delete several images, active or not.

        Returns:
            The removed images, so their files can be deleted from storage
        """
        if not image_ids:
            return []

        ids = list(image_ids)
        result = await self.session.execute(
            select(ProjectImage).where(col(ProjectImage.id).in_(ids))
        )
        images = [image.to_domain() for image in result.scalars().all()]

        if images:
            await self._write(
                "batch_permanent_delete",
                delete(ProjectImage).where(col(ProjectImage.id).in_(ids)),
                count=len(images),
            )
            logger.info("Batch permanent delete", count=len(images))

        return images

    async def get_storage_stats(self, app_id: str) -> StorageStats:
        """Count images and bytes of an app, split by deletion state."""
        images = await self.get_images_by_app(
            app_id, ImageSearchFilters(include_deleted=True)
        )

        stats = StorageStats()
        for image in images:
            stats.add(image)
        return stats
