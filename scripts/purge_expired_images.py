#!/usr/bin/env python3
"""
Permanently remove project images whose soft delete is past the retention window.

Rows are purged through the image metadata service; the files they point to are
then removed from the image storage directory. Files already missing are
reported and skipped.

Usage:
    python scripts/purge_expired_images.py [retention_days]
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from appstudio.application.image_metadata_service import ImageMetadataService
from appstudio.config import settings
from appstudio.domain.entities import ProjectImage
from appstudio.infrastructure.database.database import (
    get_async_engine,
    get_async_session,
    init_async_db,
)
from appstudio.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

USAGE = "Usage: python scripts/purge_expired_images.py [retention_days]"


def remove_image_files(images: list[ProjectImage], storage_dir: Path) -> int:
    """Delete the stored files of purged images.

    Returns:
        Number of files removed
    """
    root = storage_dir.resolve()
    removed = 0

    for image in images:
        path = (root / image.file_path).resolve()
        if not path.is_relative_to(root):
            logger.warning(
                "Skipping file outside storage directory",
                image_id=image.id,
                file_path=image.file_path,
            )
            continue
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning(
                "Image file already missing", image_id=image.id, file_path=str(path)
            )
            continue
        removed += 1

    return removed


async def purge_expired_images(retention_days: int) -> None:
    """Purge expired image rows and delete their files."""
    print("🧹 PURGING EXPIRED IMAGES")
    print("=" * 40)
    print(f"Retention: {retention_days} days")

    await init_async_db(get_async_engine())

    purged: list[ProjectImage] = []
    async for session in get_async_session():
        service = ImageMetadataService(session)
        purged = await service.purge_expired(retention_days)

    if not purged:
        print("✅ No expired images found")
        return

    for image in purged[:5]:  # Show first 5
        print(f"  ❌ {image.original_filename} ({image.id})")
    if len(purged) > 5:
        print(f"  ... and {len(purged) - 5} more")

    removed = remove_image_files(purged, Path(settings.image_storage_dir))
    freed = sum(image.size_bytes for image in purged)
    print(f"✅ Purged {len(purged)} images, removed {removed} files")
    print(f"📊 Freed {freed} bytes")


def parse_retention_days(args: list[str]) -> int | None:
    """Read the retention from the command line, falling back to settings.

    Returns:
        Retention in days, or None when the argument is not a whole number >= 0
    """
    if not args:
        return settings.image_retention_days
    if len(args) > 1 or not (args[0].isascii() and args[0].isdigit()):
        return None
    return int(args[0])


def main(args: list[str]) -> int:
    """Main entry point."""
    days = parse_retention_days(args)
    if days is None:
        print(f"❌ Invalid retention days: {' '.join(args)}")
        print(f"💡 {USAGE}")
        return 1

    setup_logging()
    asyncio.run(purge_expired_images(days))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
