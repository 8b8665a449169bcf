"""Bearer credential source for outbound admin API calls."""

import time
from typing import Protocol

import jwt

from bucketbase.core.logging import get_logger

logger = get_logger(__name__)


class TokenProvider(Protocol):
    """Supplies the bearer token for admin API calls.

    ``get_token`` returns None when there is no usable credential; callers
    must then not send the request at all.
    """

    def get_token(self) -> str | None: ...


class TokenStore:
    """Holds the console's access token for the session.

    The expiry is read from the token's ``exp`` claim without verifying the
    signature; verification is the server's job.
    """

    def __init__(self, token: str | None = None, leeway_seconds: int = 0) -> None:
        self._token = token
        self.leeway_seconds = leeway_seconds

    def set_token(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None

    def get_token(self) -> str | None:
        if not self._token:
            return None
        try:
            claims = jwt.decode(self._token, options={"verify_signature": False})
        except jwt.InvalidTokenError:
            logger.warning("Stored access token is not a JWT, discarding it")
            self._token = None
            return None

        exp = claims.get("exp")
        if exp is not None and float(exp) <= time.time() + self.leeway_seconds:
            logger.info("Stored access token has expired")
            self._token = None
            return None
        return self._token
