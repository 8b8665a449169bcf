"""JWT access tokens for the admin API.

The login endpoint issues an HS256 access token; every other admin endpoint
validates it and checks the ``role`` claim.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from bucketbase.core.config import get_settings

ADMIN_ROLE = "admin"


class JWTError(Exception):
    """Base exception for JWT-related errors."""


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""


class JWTService:
    """Create and validate access tokens."""

    ALGORITHM = "HS256"
    ISSUER = "bucketbase"

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens. If not provided,
                        uses the configured secret key from settings.
        """
        self._secret_key = secret_key

    @property
    def secret_key(self) -> str:
        if self._secret_key:
            return self._secret_key
        return get_settings().secret_key

    def create_access_token(
        self,
        subject: str,
        role: str = ADMIN_ROLE,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token.

        Args:
            subject: Username the token is issued to.
            role: Role claim checked by the API.
            expires_delta: Custom lifetime. Defaults to the configured value (8 hours).

        Returns:
            Encoded JWT access token.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)

        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": subject,
            "iat": now,
            "exp": now + expires_delta,
            "role": role,
            "type": "access",
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a JWT token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid.
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Decode a token and check that it is an access token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or not an access token.
        """
        payload = self.decode_token(token)
        if payload.get("type") != "access":
            raise InvalidTokenError("Not an access token")
        return payload

    def get_expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return get_settings().access_token_expire_minutes * 60


jwt_service = JWTService()
