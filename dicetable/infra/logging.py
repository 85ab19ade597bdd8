"""App-level logging policy read from the environment."""

from __future__ import annotations

import logging
import os

from dicetable.runtime.logging import LoggingConfig, configure_logging

logger = logging.getLogger(__name__)


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with the app-prefixed variable taking precedence."""
    value = os.getenv("DICETABLE_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def setup_logging() -> None:
    """Configure logging from DICETABLE_LOG_LEVEL, LOG_FORMAT and DICETABLE_LOG_FILE."""
    file_path = os.getenv("DICETABLE_LOG_FILE", "").strip() or None
    configure_logging(
        LoggingConfig(
            level_name=resolve_log_level_name(),
            console_format=os.getenv("LOG_FORMAT", "text").strip().lower(),
            file_path=file_path,
            file_format="json",
        )
    )
    if file_path is not None:
        logger.info("logging_file=%s", file_path)
