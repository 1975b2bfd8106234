"""
Security helpers for ElectroMart.

- Password hashing (passlib)
- JWT issuance and verification (python-jose)
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt
from jose.exceptions import JOSEError
from passlib.context import CryptContext


DEFAULT_SECRET_KEY = "secret"
DEFAULT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = 72

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plaintext password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check a plaintext password against a stored hash."""
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognizable hash
        return False


class TokenError(Exception):
    """A token could not be issued or verified."""


class TokenService:
    """
    Issues and verifies signed access tokens.

    Claims: username, role and exp (hours from now).
    """

    def __init__(
        self,
        secret_key: str = DEFAULT_SECRET_KEY,
        algorithm: str = DEFAULT_ALGORITHM,
        expire_hours: int = ACCESS_TOKEN_EXPIRE_HOURS,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_hours = expire_hours

    def create_access_token(self, username: str, role: str) -> str:
        """
        Sign a token for a user.

        Raises:
            TokenError: If the token cannot be signed
        """
        expire = datetime.now(timezone.utc) + timedelta(hours=self.expire_hours)
        claims = {
            "username": username,
            "role": role,
            "exp": expire,
        }
        try:
            return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
        except JOSEError as e:
            raise TokenError(f"could not generate token: {e}") from e

    def decode_access_token(self, token: str) -> dict:
        """
        Verify a token and return its claims.

        Raises:
            TokenError: If the token is malformed, expired or wrongly signed
        """
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JOSEError as e:
            raise TokenError(str(e)) from e
