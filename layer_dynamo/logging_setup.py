"""
Layer Dynamo - Logging Setup
"""

import logging

from .config import get_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """
    Configure root logging for processes embedding the layer.

    Args:
        level: Log level; defaults to the configured LOG_LEVEL
    """
    if level is None:
        level = get_config().log_level.value
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("botocore").setLevel(logging.WARNING)
