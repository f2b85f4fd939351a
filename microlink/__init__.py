"""Core logic for the short link service."""

from .errors import CodeConflict, InvalidInput, LinkError, NotFound, StoreUnavailable
from .resolver import RedirectResolver, RedirectTarget
from .service import LinkService

__all__ = [
    "LinkService",
    "RedirectResolver",
    "RedirectTarget",
    "LinkError",
    "InvalidInput",
    "CodeConflict",
    "NotFound",
    "StoreUnavailable",
]
