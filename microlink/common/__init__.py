"""Common utilities for the link service."""

from .logging_config import setup_logging
from .urls import build_base_url, build_short_url
from .validators import is_valid_short_code, is_valid_url, normalize_target_url

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "normalize_target_url",
    "build_base_url",
    "build_short_url",
    "setup_logging",
]
