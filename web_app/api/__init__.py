"""JSON API for registering and inspecting links."""

from .routes import router as api_router

__all__ = ["api_router"]
