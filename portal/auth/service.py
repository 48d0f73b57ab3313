"""
Authentication service layer for business logic.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session, joinedload

from ..config import settings
from ..core.security import TokenClaims, TokenCodec, hash_password, verify_password
from ..core.two_factor import TwoFactorVerifier
from ..exceptions import AuthenticationError, AuthorizationError, ConflictError
from ..patients.models import Patient
from ..providers.models import Provider
from .models import User, UserRole, UserSession
from .schemas import RegisterRequest, to_user_response

# Set up logging
logger = logging.getLogger(__name__)

def _load_user_by_email(db: Session, email: str) -> Optional[User]:
    return (
        db.query(User)
        .options(joinedload(User.patient), joinedload(User.provider))
        .filter(User.email == email)
        .first()
    )

def create_session(db: Session, codec: TokenCodec, user: User, now: Optional[datetime] = None) -> str:
    """
    Mint a token for the user and persist its session row.

    Every call creates a new row, so a user may hold several live sessions
    (one per device).

    Args:
        db: Database session
        codec: Token codec
        user: Authenticated user
        now: Issue time (defaults to the current UTC time)

    Returns:
        str: The bearer token
    """
    now = now or datetime.now(timezone.utc)
    token = codec.issue(
        TokenClaims(
            user_id=user.id,
            email=user.email,
            role=user.role.value,
            first_name=user.first_name,
            last_name=user.last_name,
        ),
        now=now,
    )
    db.add(UserSession(
        user_id=user.id,
        token=token,
        expires_at=now + timedelta(days=settings.session_expire_days),
    ))
    db.commit()
    return token

async def login_user(
    db: Session,
    codec: TokenCodec,
    verifier: TwoFactorVerifier,
    email: str,
    password: str,
    two_fa_token: Optional[str] = None
) -> Dict[str, Any]:
    """
    Authenticate a user and open a session.

    Args:
        db: Database session
        codec: Token codec
        verifier: Second-factor verifier, consulted only when the account has 2FA enabled
        email: User's email address
        password: User's password
        two_fa_token: Second-factor code

    Returns:
        Dict with the sanitized user and the bearer token

    Raises:
        AuthenticationError: Unknown email, wrong password, deactivated account or failed 2FA
    """
    user = _load_user_by_email(db, email)

    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Login failed: Invalid credentials for {email}")
        raise AuthenticationError("Invalid credentials")

    # Only reported once the password matched, so it does not reveal which emails exist
    if not user.is_active:
        logger.warning(f"Login failed: Account {user.id} is deactivated")
        raise AuthenticationError("Account is deactivated")

    if user.two_fa_enabled:
        if not two_fa_token:
            raise AuthenticationError("2FA token required")
        if not verifier.verify(user, two_fa_token):
            logger.warning(f"Login failed: Invalid 2FA token for user {user.id}")
            raise AuthenticationError("Invalid 2FA token")

    token = create_session(db, codec, user)
    logger.info(f"Login successful: User {user.id} ({email})")

    return {"user": to_user_response(user), "token": token}

async def logout_user(db: Session, token: str) -> int:
    """
    Delete every session row carrying the token.

    Args:
        db: Database session
        token: Bearer token

    Returns:
        int: Number of rows deleted (zero is not an error)
    """
    deleted = db.query(UserSession).filter(UserSession.token == token).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Logout: {deleted} session(s) removed")
    return deleted

async def register_user(db: Session, codec: TokenCodec, data: RegisterRequest) -> Dict[str, Any]:
    """
    Register a patient or provider and open a session for them.

    Args:
        db: Database session
        codec: Token codec
        data: Validated registration payload

    Returns:
        Dict with the sanitized user and the bearer token

    Raises:
        AuthorizationError: If the requested role may not self-register
        ConflictError: If the email is already registered
    """
    if data.role == UserRole.ADMIN:
        logger.warning(f"Registration refused: ADMIN self-registration for {data.email}")
        raise AuthorizationError("Administrator accounts cannot be self-registered")

    if db.query(User).filter(User.email == data.email).first():
        logger.warning(f"Registration failed: Email {data.email} already exists")
        raise ConflictError("User with this email already exists", status_code=409)

    user = User(
        email=data.email,
        password_hash=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        phone=data.phone,
        role=data.role,
    )
    if data.role == UserRole.PATIENT:
        user.patient = Patient(
            date_of_birth=data.date_of_birth,
            gender=data.gender,
            address=data.address,
            city=data.city,
            state=data.state,
            zip_code=data.zip_code,
        )
    else:
        user.provider = Provider(
            title=data.title,
            specialty=data.specialty,
            license_number=data.license_number,
            department=data.department,
        )

    # User and sub-profile are committed together
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registration successful: User {user.id} ({user.email}) as {user.role.value}")

    token = create_session(db, codec, user)
    return {"user": to_user_response(user), "token": token}

def purge_expired_sessions(db: Session, now: Optional[datetime] = None) -> int:
    """
    Delete session rows whose expiry has passed.

    Expiry is already enforced on every read; this only keeps the table small.

    Args:
        db: Database session
        now: Cut-off time (defaults to the current UTC time)

    Returns:
        int: Number of rows deleted
    """
    now = now or datetime.now(timezone.utc)
    deleted = db.query(UserSession).filter(UserSession.expires_at <= now).delete(synchronize_session=False)
    db.commit()
    if deleted:
        logger.info(f"Purged {deleted} expired session(s)")
    return deleted
