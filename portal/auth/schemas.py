"""
User Schemas - Pydantic models for authentication requests and user payloads.

A user payload is a union tagged by ``role``: only the sub-profile that
matches the role is ever present.
"""
from datetime import date
from typing import Annotated, Dict, List, Literal, Optional, Type, Union
from pydantic import Field, field_validator

from ..core.schemas import CamelModel, check_email_format
from ..patients.schemas import PatientProfileResponse
from ..providers.schemas import ProviderProfileResponse
from .models import User, UserRole

class LoginRequest(CamelModel):
    """
    Login Schema - Used for authentication

    Fields:
    - email: Well-formed email address
    - password: Non-empty plain text password
    - two_fa_token: Second-factor code, required only when the account has 2FA enabled
    """
    email: str
    password: str
    two_fa_token: Optional[str] = Field(None, alias="twoFAToken")

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, value):
        return check_email_format(value)

    @field_validator("password")
    @classmethod
    def password_required(cls, value):
        if not value:
            raise ValueError("Password is required")
        return value


class RegisterRequest(CamelModel):
    """
    Self-registration Schema.

    Common fields plus the role-specific ones; patient fields are ignored for
    providers and vice versa.
    """
    email: str
    password: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: UserRole
    # Patient specific fields
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    # Provider specific fields
    title: Optional[str] = None
    specialty: Optional[str] = None
    license_number: Optional[str] = None
    department: Optional[str] = None

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, value):
        return check_email_format(value)

    @field_validator("password")
    @classmethod
    def password_min_length(cls, value):
        if len(value) < 8:
            raise ValueError("Password must be at least 8 characters")
        return value

    @field_validator("first_name")
    @classmethod
    def first_name_required(cls, value):
        if not value.strip():
            raise ValueError("First name is required")
        return value

    @field_validator("last_name")
    @classmethod
    def last_name_required(cls, value):
        if not value.strip():
            raise ValueError("Last name is required")
        return value


class UserBase(CamelModel):
    """
    Fields shared by every user payload. The password hash is never exposed.
    """
    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    two_fa_enabled: bool = Field(False, alias="twoFAEnabled")


class PatientUserResponse(UserBase):
    role: Literal[UserRole.PATIENT]
    patient: Optional[PatientProfileResponse] = None


class ProviderUserResponse(UserBase):
    role: Literal[UserRole.PROVIDER]
    provider: Optional[ProviderProfileResponse] = None


class AdminUserResponse(UserBase):
    role: Literal[UserRole.ADMIN]


UserResponse = Annotated[
    Union[PatientUserResponse, ProviderUserResponse, AdminUserResponse],
    Field(discriminator="role"),
]

USER_RESPONSE_BY_ROLE: Dict[UserRole, Type[UserBase]] = {
    UserRole.PATIENT: PatientUserResponse,
    UserRole.PROVIDER: ProviderUserResponse,
    UserRole.ADMIN: AdminUserResponse,
}


def to_user_response(user: User) -> UserResponse:
    """
    Convert a User ORM object into the payload variant for its role.

    Args:
        user: User with its sub-profile relations loaded

    Returns:
        The role-specific response model
    """
    return USER_RESPONSE_BY_ROLE[UserRole(user.role)].model_validate(user)


def to_user_responses(users: List[User]) -> List[UserBase]:
    return [to_user_response(user) for user in users]

