"""Domain business rules and constants."""

from typing import Final

# Image lifecycle
DEFAULT_RETENTION_DAYS: Final = 30

# Column limits for project image metadata
MAX_ID_LENGTH: Final = 64
MAX_FILE_PATH_LENGTH: Final = 1024
MAX_FILENAME_LENGTH: Final = 255
MAX_MIME_TYPE_LENGTH: Final = 100
MAX_HASH_LENGTH: Final = 128
MAX_FORMAT_LENGTH: Final = 20
