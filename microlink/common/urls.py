"""Helpers for building public short URLs behind a proxy."""

from typing import Mapping, Optional


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build the public base URL of the service.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Fallback base URL from config
    """
    headers_lower = {k.lower(): v for k, v in headers.items()}
    proto = headers_lower.get("x-forwarded-proto")
    host = headers_lower.get("x-forwarded-host")

    if proto and host:
        return f"{proto}://{host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def build_short_url(short_code: str, base_url: str, path_prefix: str = "") -> str:
    """Join base URL, optional path prefix and short code."""
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{short_code}"
    return f"{base}/{short_code}"
