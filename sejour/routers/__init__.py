"""
API route handlers for the Sejour rental API.
"""

from .properties import router as properties_router
from .images import router as images_router

__all__ = ["properties_router", "images_router"]
