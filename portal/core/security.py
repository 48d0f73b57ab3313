"""
Core security utilities for authentication and password handling.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from passlib.context import CryptContext
import secrets
import logging

from ..config import settings

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)

def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash
    """
    return pwd_context.verify(plain_password, hashed_password)


class MalformedTokenError(ValueError):
    """Raised when the input is not a compact JWT at all."""


@dataclass(frozen=True)
class TokenClaims:
    """Minimal claim set embedded in a bearer token."""
    user_id: int
    email: str
    role: str
    first_name: str
    last_name: str


class TokenCodec:
    """
    Mints and verifies signed bearer tokens.

    A valid token is necessary but not sufficient for authentication: the
    session row is what revokes it, so callers must still check the
    session store after ``verify`` succeeds.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_delta: timedelta = timedelta(days=7)):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, claims: TokenClaims, now: Optional[datetime] = None) -> str:
        """
        Create a signed token for the given claims.

        Args:
            claims: Identity claims to embed
            now: Issue time (defaults to the current UTC time)

        Returns:
            str: Encoded JWT
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "userId": claims.user_id,
            "email": claims.email,
            "role": claims.role,
            "firstName": claims.first_name,
            "lastName": claims.last_name,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
            # Tokens double as session keys, so two logins in the same second must differ
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[TokenClaims]:
        """
        Verify a token's signature and embedded expiry.

        Args:
            token: Encoded JWT

        Returns:
            TokenClaims if the token is valid, None if the signature is bad,
            the token has expired or required claims are missing.

        Raises:
            MalformedTokenError: If the input is not a three-segment JWT string
        """
        if not isinstance(token, str) or token.count(".") != 2 or not all(token.split(".")):
            raise MalformedTokenError("Token is not a compact JWT")

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"Token rejected: {str(e)}")
            return None

        try:
            return TokenClaims(
                user_id=int(payload["userId"]),
                email=payload["email"],
                role=payload["role"],
                first_name=payload.get("firstName", ""),
                last_name=payload.get("lastName", ""),
            )
        except (KeyError, TypeError, ValueError):
            logger.debug("Token rejected: missing or malformed claims")
            return None
