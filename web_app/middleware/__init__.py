"""Middleware for the link service web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
