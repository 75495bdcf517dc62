"""Logging utilities for gltf_geometry."""

import logging
from typing import Optional

LOGGER_NAME = "gltf_geometry"


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the gltf_geometry namespace."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(level: Optional[int] = None) -> None:
    """Set up logging for gltf_geometry."""
    if level is None:
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Only add handler if none exists
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
