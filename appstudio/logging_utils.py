import logging
from datetime import UTC, datetime
from typing import Any


def log_user_action(
    action: str, user: str, logger_name: str = "user_actions", **kwargs: Any
) -> None:
    """Log user actions with consistent structure.

    Args:
        action: The action being performed (e.g., 'soft_delete_image')
        user: ID of the user performing the action
        logger_name: Name of the logger to use
        **kwargs: Additional context data
    """
    logger = logging.getLogger(logger_name)

    log_data = {
        "action": action,
        "user": user,
        "timestamp": datetime.now(UTC).isoformat(),
        **kwargs,
    }

    logger.info(f"User action: {action} by {user}", extra=log_data)


def log_database_operation(
    operation: str,
    table: str,
    success: bool = True,
    logger_name: str = "database",
    **kwargs: Any,
) -> None:
    """Log database operations.

    Args:
        operation: Database operation (create, update, soft_delete, purge, ...)
        table: Table name being operated on
        success: Whether the operation was successful
        logger_name: Name of the logger to use
        **kwargs: Additional context data
    """
    logger = logging.getLogger(logger_name)

    log_data = {"operation": operation, "table": table, "success": success, **kwargs}

    level = logging.INFO if success else logging.ERROR
    status = "succeeded" if success else "failed"

    logger.log(level, f"Database {operation} on {table} {status}", extra=log_data)
