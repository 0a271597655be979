"""API routers package."""

from api import generate

__all__ = [
    "generate",
]
