"""
User and Session models - identity records and the server-side sessions that back bearer tokens.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from ..database import Base

class UserRole(str, enum.Enum):
    """
    Enumeration for user roles in the healthcare portal.

    Roles:
    - PATIENT: Patients who view their records and message providers
    - PROVIDER: Clinicians who own medical records
    - ADMIN: System administrators with full access
    """
    PATIENT = "PATIENT"
    PROVIDER = "PROVIDER"
    ADMIN = "ADMIN"

class User(Base):
    """
    User Model - Stores all user information in the system

    Fields:
    - id: Primary key for user identification
    - email: Unique email address used for login
    - password_hash: Securely hashed password (never store raw passwords)
    - first_name, last_name: User's name
    - role: Exactly one of PATIENT, PROVIDER, ADMIN
    - phone: Contact number (optional)
    - profile_image: Reference to the uploaded profile image (optional)
    - is_active: Soft-disable flag; inactive users cannot log in or authenticate
    - two_fa_enabled: Whether login requires a second factor
    - two_fa_secret: Secret handed to the second-factor verifier (optional)
    - created_at / updated_at: Timestamps
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    # Stored as VARCHAR so ordering by role is alphabetical on every backend
    role = Column(Enum(UserRole, native_enum=False, length=20), nullable=False, default=UserRole.PATIENT)
    phone = Column(String, nullable=True)
    profile_image = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    two_fa_enabled = Column(Boolean, nullable=False, default=False)
    two_fa_secret = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    patient = relationship("Patient", back_populates="user", uselist=False, cascade="all, delete-orphan")
    provider = relationship("Provider", back_populates="user", uselist=False, cascade="all, delete-orphan")
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class UserSession(Base):
    """
    Session Model - Server-side record for an issued bearer token.

    A session is valid iff the row exists and the current time is before
    ``expires_at``. Logout deletes the row.
    """
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="sessions")

    def __repr__(self):
        return f"<UserSession(id={self.id}, user_id={self.user_id}, expires_at='{self.expires_at}')>"
