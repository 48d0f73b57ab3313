"""
First administrator provisioning.

Administrators cannot self-register, so the first one is created at startup
from ``BOOTSTRAP_ADMIN_EMAIL`` / ``BOOTSTRAP_ADMIN_PASSWORD``.
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session

from ..auth.models import User, UserRole
from ..config import settings
from .security import hash_password

# Set up logging
logger = logging.getLogger(__name__)

def admin_exists(db: Session) -> bool:
    return db.query(User.id).filter(User.role == UserRole.ADMIN).first() is not None

def create_bootstrap_admin(db: Session, email: Optional[str] = None, password: Optional[str] = None) -> Optional[User]:
    """
    Create the "System Administrator" account.

    Args:
        db: Database session
        email: Admin email, defaults to settings.bootstrap_admin_email
        password: Admin password, defaults to settings.bootstrap_admin_password

    Returns:
        The new admin, or None when credentials are missing or the email is taken
    """
    email = email or settings.bootstrap_admin_email
    password = password or settings.bootstrap_admin_password
    if not email or not password:
        logger.warning("Bootstrap admin credentials are not configured")
        return None

    if db.query(User.id).filter(User.email == email).first() is not None:
        logger.warning(f"Bootstrap admin skipped: {email} is already registered")
        return None

    admin = User(
        email=email,
        password_hash=hash_password(password),
        first_name="System",
        last_name="Administrator",
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"Bootstrap admin created: {admin.email} (ID: {admin.id})")
    return admin

def bootstrap_admin_if_needed(db: Session) -> None:
    """Create the bootstrap admin unless an administrator already exists."""
    if admin_exists(db):
        return

    if create_bootstrap_admin(db) is None:
        logger.info("No administrator exists. Set BOOTSTRAP_ADMIN_EMAIL and BOOTSTRAP_ADMIN_PASSWORD to create one.")
