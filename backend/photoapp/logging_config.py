"""Logging setup shared by the CLI and embedding applications."""

import logging

from photoapp.config import get_settings


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger from settings.

    Args:
        level: Optional override for ``Settings.log_level``
    """
    settings = get_settings()
    name = (level or settings.log_level).upper()

    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=settings.log_format,
    )
    # Pillow plugin discovery is noisy at DEBUG
    logging.getLogger("PIL").setLevel(logging.INFO)
