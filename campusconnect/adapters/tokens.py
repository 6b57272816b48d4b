"""
JWT token adapter - Implements TokenIssuer protocol with PyJWT.

Tokens are stateless HS256 JWTs: {"sub": account_id, "iat", "exp"}.
There is no revocation list; a token is valid until it expires.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from jwt.exceptions import InvalidTokenError

from campusconnect.domain.models import utcnow


class InvalidToken(Exception):
    """Raised when a token fails signature, format, or expiry checks."""

    pass


@dataclass(frozen=True)
class TokenClaims:
    account_id: str
    issued_at: datetime
    expires_at: datetime


class JwtTokenIssuer:
    """Signs and verifies bounded-lifetime session tokens."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._secret = secret
        self._ttl_seconds = ttl_seconds
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, account_id: str, ttl_seconds: int | None = None) -> str:
        if ttl_seconds is None:
            ttl_seconds = self._ttl_seconds
        issued_at = self._clock()
        expires_at = issued_at + timedelta(seconds=ttl_seconds)
        payload = {"sub": account_id, "iat": issued_at, "exp": expires_at}
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry and return the token's claims.

        Raises:
            InvalidToken: Bad signature, malformed, expired, or missing claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except InvalidTokenError as e:
            raise InvalidToken(str(e)) from e

        account_id = payload["sub"]
        if not isinstance(account_id, str) or not account_id:
            raise InvalidToken("Token subject is not an account id")
        return TokenClaims(
            account_id=account_id,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
