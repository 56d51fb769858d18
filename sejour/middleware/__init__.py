"""
Middleware package for the Sejour rental API.
"""

from .request_logging import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
]
