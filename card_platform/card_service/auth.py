from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, Header, Request

from .errors import UnauthorizedError

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60
BCRYPT_ROUNDS = 10
# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode())
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class TokenIssuer:
    """Signs and verifies the ``{id, username}`` session tokens with one shared secret."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = ALGORITHM,
        expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expires_minutes)

    def issue(self, user_id: int, username: str, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        """
        Decode a token, checking its signature and expiry.

        Raises:
            jwt.InvalidTokenError: if the token is malformed, forged or expired
        """
        return jwt.decode(
            token,
            self.secret_key,
            algorithms=[self.algorithm],
            options={"require": ["exp", "iat"]},
        )


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_current_claims(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> dict:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise UnauthorizedError("Not authenticated")
    token = authorization.split(" ", 1)[1].strip()
    try:
        claims = issuer.verify(token)
    except jwt.InvalidTokenError as exc:
        raise UnauthorizedError("Invalid token") from exc
    if "id" not in claims or "username" not in claims:
        raise UnauthorizedError("Invalid token")
    return claims
