"""Validation utilities for short links."""

import re
from typing import Tuple
from urllib.parse import urlparse


MAX_URL_LENGTH = 2048
MAX_SHORT_CODE_LENGTH = 64
DEFAULT_SCHEME = "https"

# Served by the application itself at the top level
RESERVED_CODES = {"healthz"}

# Leading scheme, e.g. "https://"; a "://" later in the query string is not one
SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")

# Characters that cannot come back intact through GET /{short_code}
UNROUTABLE_CODE_CHARS = frozenset("/?#\\")


def normalize_target_url(url: str) -> str:
    """Strip whitespace and add ``https://`` when the URL has no scheme.

    Args:
        url: The URL as submitted

    Returns:
        The URL to validate and persist
    """
    url = (url or "").strip()
    if url and not SCHEME_PATTERN.match(url):
        url = f"{DEFAULT_SCHEME}://{url}"
    return url


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate an absolute http(s) URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "target_url is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"target_url is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if result.scheme not in ("http", "https"):
        return False, "target_url must use http or https"

    if not result.netloc:
        return False, "target_url must have a valid domain"

    if any(c.isspace() for c in url):
        return False, "target_url must not contain whitespace"

    return True, ""


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Validate a short code.

    Codes are stored exactly as given; callers lowercase them before
    submission if they want case-insensitive codes. Any printable code is
    accepted as long as it survives the round trip through the redirect path.

    Args:
        short_code: The short code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "short_code is required"

    if len(short_code) > MAX_SHORT_CODE_LENGTH:
        return False, f"short_code must be at most {MAX_SHORT_CODE_LENGTH} characters"

    if any(c in UNROUTABLE_CODE_CHARS or c.isspace() or not c.isprintable() for c in short_code):
        return False, "short_code cannot contain '/', '?', '#', '\\', whitespace or control characters"

    # Clients collapse dot segments before sending the request
    if short_code in (".", ".."):
        return False, f"'{short_code}' cannot be used as a short code"

    if short_code in RESERVED_CODES:
        return False, f"'{short_code}' is reserved and cannot be used"

    return True, ""
