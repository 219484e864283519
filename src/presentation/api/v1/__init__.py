"""Version 1 API."""

from .router import router

__all__ = ["router"]
