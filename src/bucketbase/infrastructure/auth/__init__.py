"""Authentication: JWT issuing/validation and the console's token store."""

from bucketbase.infrastructure.auth.jwt_service import (
    ADMIN_ROLE,
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
    jwt_service,
)
from bucketbase.infrastructure.auth.token_provider import TokenProvider, TokenStore

__all__ = [
    "ADMIN_ROLE",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "TokenExpiredError",
    "TokenProvider",
    "TokenStore",
    "jwt_service",
]
