"""Signed, time-limited session tokens (JWT). Stateless: nothing is persisted server-side."""

import uuid
from datetime import datetime, timedelta, timezone

import jwt

from app.security.exceptions import UnauthenticatedError
from app.security.rbac import IdentityContext, Role

MISSING_TOKEN_MESSAGE = "Access token required"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"
DEFAULT_EXPIRATION_MINUTES = 24 * 60

_REQUIRED_CLAIMS = ["id", "username", "role", "iat", "exp"]


class TokenService:
    """
    Issues and verifies HMAC-signed JWTs carrying {id, username, role}.

    Verification trusts the claims: a role change or deactivation after
    issuance is not visible until the token expires.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiration_minutes: int = DEFAULT_EXPIRATION_MINUTES,
    ) -> None:
        if not secret:
            raise ValueError("Token secret is required")
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = timedelta(minutes=expiration_minutes)

    def issue(self, *, user_id: int, username: str, role: Role) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "username": username,
            "role": Role(role).value,
            "iat": now,
            "exp": now + self._lifetime,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str | None) -> IdentityContext:
        """Return the identity in a valid token. Raises UnauthenticatedError otherwise."""
        if not token:
            raise UnauthenticatedError(MISSING_TOKEN_MESSAGE)
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.PyJWTError as e:
            raise UnauthenticatedError(INVALID_TOKEN_MESSAGE) from e

        try:
            return IdentityContext(
                id=int(claims["id"]),
                username=str(claims["username"]),
                role=Role(claims["role"]),
            )
        except (TypeError, ValueError) as e:
            raise UnauthenticatedError(INVALID_TOKEN_MESSAGE) from e
