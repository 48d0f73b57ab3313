"""
Authentication routes for the healthcare portal.
"""
from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from ..core.responses import ErrorEnvelope, success_response
from ..core.security import TokenCodec
from ..core.two_factor import TwoFactorVerifier
from ..database import get_db
from ..exceptions import AppException, AuthenticationError, InternalError
from .dependencies import (
    extract_bearer_token, get_current_user, get_token_codec, get_two_factor_verifier
)
from .models import User
from .schemas import LoginRequest, RegisterRequest, to_user_response
from .service import login_user, logout_user, register_user

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()

AUTH_ERRORS = {
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorEnvelope},
}

@router.post("/login", summary="User Login", responses=AUTH_ERRORS)
async def login_route(
    login_data: LoginRequest,
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
    verifier: TwoFactorVerifier = Depends(get_two_factor_verifier)
):
    """
    User login endpoint.

    Args:
        login_data: Email, password and optional second-factor code
        db: Database session
        codec: Token codec
        verifier: Second-factor verifier

    Returns:
        Envelope with the user (without password) and the bearer token

    Raises:
        AuthenticationError: If credentials are invalid, the account is deactivated or 2FA fails
    """
    try:
        result = await login_user(
            db=db,
            codec=codec,
            verifier=verifier,
            email=login_data.email,
            password=login_data.password,
            two_fa_token=login_data.two_fa_token
        )
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during login: {str(e)}")
        raise InternalError()
    return success_response(result, "Login successful")

@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Patient/Provider Self-Registration")
async def register_route(
    registration: RegisterRequest,
    db: Session = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec)
):
    """
    Self-registration endpoint for patients and providers.

    Creates the user and the matching sub-profile, then logs the new user in.
    """
    try:
        result = await register_user(db, codec, registration)
    except AppException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error during registration: {str(e)}")
        raise InternalError()
    return success_response(result, "Registration successful", status.HTTP_201_CREATED)

@router.post("/logout", status_code=status.HTTP_200_OK, summary="User Logout", responses=AUTH_ERRORS)
async def logout_route(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
):
    """
    Logout endpoint.

    Deletes the session rows for the presented token. Succeeds whether or not
    a matching session existed.
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise AuthenticationError("No token provided")

    try:
        await logout_user(db, token)
    except Exception as e:
        logger.error(f"Unexpected error during logout: {str(e)}")
        raise InternalError()
    return success_response(None, "Logout successful")

@router.get("/me", summary="Get Current User Profile", responses=AUTH_ERRORS)
async def get_me(current_user: User = Depends(get_current_user)):
    """
    Get the authenticated user's profile, including the sub-profile for their role.
    """
    return success_response(to_user_response(current_user))
