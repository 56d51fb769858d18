"""
Utility modules for the Sejour rental API.
"""

from .auth import (
    create_access_token,
    verify_token,
    TokenPayload
)

from .exceptions import (
    APIException,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    BadRequestError,
    InternalServerError,
    TokenExpiredError,
    InvalidTokenError,
    PropertyNotFoundError,
    PropertyOwnershipError,
    ImageNotFoundError,
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "create_access_token",
    "verify_token",
    "TokenPayload",

    # Exceptions
    "APIException",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "BadRequestError",
    "InternalServerError",
    "TokenExpiredError",
    "InvalidTokenError",
    "PropertyNotFoundError",
    "PropertyOwnershipError",
    "ImageNotFoundError",
]
