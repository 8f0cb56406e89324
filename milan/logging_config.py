import logging
from typing import Optional

from milan.config import Settings, settings as default_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Apply the configured level and format to the root logger.

    DEBUG mode forces the DEBUG level regardless of LOG_LEVEL.
    """
    settings = settings or default_settings
    level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL.upper()

    logging.basicConfig(
        level=level,
        format=settings.LOG_FORMAT,
        force=True,
    )
    logging.getLogger(__name__).debug(
        f"Logging configured for {settings.APP_NAME} ({settings.ENV}) at {level}"
    )
