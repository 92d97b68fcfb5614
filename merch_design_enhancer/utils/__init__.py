"""Utility modules for configuration, logging, errors and image inputs."""

from .config import load_config, get_config
from .logger import get_logger
from .images import normalize_image_input, detect_mime_type

__all__ = [
    "load_config",
    "get_config",
    "get_logger",
    "normalize_image_input",
    "detect_mime_type",
]
