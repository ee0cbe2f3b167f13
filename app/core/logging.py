import logging

from .config import settings


def configure_logging() -> None:
    """Configure logging defaults for the application."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
