"""
FastAPI dependencies for authentication and authorization.

``resolve_current_user`` is the auth gate every protected endpoint runs:
bearer token -> signature check -> live session row -> active user.
"""
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session, joinedload
import logging

from ..config import settings
from ..core.security import TokenCodec, MalformedTokenError
from ..core.two_factor import TwoFactorVerifier, PatternTwoFactorVerifier
from ..database import get_db
from ..exceptions import AuthenticationError, AuthorizationError, NotFoundError
from .models import User, UserRole, UserSession

# Set up logging
logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

@lru_cache()
def get_token_codec() -> TokenCodec:
    """Token codec configured from settings; override in tests."""
    return TokenCodec(
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        expires_delta=timedelta(days=settings.token_expire_days),
    )

def get_two_factor_verifier() -> TwoFactorVerifier:
    """Second-factor verifier used at login; override to plug in real TOTP."""
    return PatternTwoFactorVerifier()

def as_utc(value: datetime) -> datetime:
    """SQLite returns naive datetimes; everything is stored in UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header.

    Args:
        authorization: Raw header value (may be None)

    Returns:
        The token, or None if the header is missing or not a bearer header
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None

def resolve_current_user(
    db: Session,
    codec: TokenCodec,
    authorization: Optional[str],
    now: Optional[datetime] = None
) -> User:
    """
    Resolve the authenticated user for a request.

    Args:
        db: Database session
        codec: Token codec used to verify the bearer token
        authorization: Raw Authorization header value
        now: Time used for the session expiry check (defaults to current UTC time)

    Returns:
        User: Active user with ``patient``/``provider`` loaded

    Raises:
        AuthenticationError: No token, invalid token, or missing/expired session
        NotFoundError: User no longer exists or is inactive
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise AuthenticationError("No token provided")

    try:
        claims = codec.verify(token)
    except MalformedTokenError:
        claims = None
    if claims is None:
        raise AuthenticationError("Invalid token")

    # The session row, not the signature, decides whether the token is revoked
    session = db.query(UserSession).filter(UserSession.token == token).first()
    now = now or datetime.now(timezone.utc)
    if not session or now >= as_utc(session.expires_at):
        raise AuthenticationError("Session expired")

    user = (
        db.query(User)
        .options(joinedload(User.patient), joinedload(User.provider))
        .filter(User.id == claims.user_id)
        .first()
    )
    if not user or not user.is_active:
        raise NotFoundError("User not found or inactive")

    return user

def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec)
) -> User:
    """
    Get current authenticated user from the bearer token and its session row.

    Args:
        authorization: Authorization header
        db: Database session
        codec: Token codec

    Returns:
        User: Current authenticated user
    """
    return resolve_current_user(db, codec, authorization)

def require_roles(*allowed_roles: UserRole, detail: str = "Forbidden"):
    """
    Dependency factory to require specific roles.

    Args:
        allowed_roles: Roles that are allowed access
        detail: Error message returned on denial

    Returns:
        Function that checks if user has required role
    """
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            logger.warning(
                f"Access denied for user {current_user.id}: role {current_user.role.value} "
                f"not in {[role.value for role in allowed_roles]}"
            )
            raise AuthorizationError(detail)
        return current_user
    return role_checker

# Convenience dependency for patient-only endpoints
require_patient = require_roles(UserRole.PATIENT)
