"""
User Router - directory listing for authenticated users.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging

from ..auth.dependencies import get_current_user
from ..auth.models import User, UserRole
from ..auth.schemas import to_user_responses
from ..core.responses import success_response
from ..database import get_db
from ..exceptions import InternalError, ValidationError
from .service import list_active_users

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()

def role_filter(
    role: Optional[str] = Query(None, description="Filter by role (PATIENT, PROVIDER, ADMIN); empty means no filter")
) -> Optional[UserRole]:
    if not role:
        return None
    try:
        return UserRole(role)
    except ValueError:
        raise ValidationError(f"Invalid role: {role}")

@router.get("/users", summary="List Users")
async def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    role: Optional[UserRole] = Depends(role_filter)
):
    """
    List active users sorted by role, first name and last name.
    """
    try:
        users = list_active_users(db, role)
    except Exception as e:
        logger.error(f"Error fetching users: {str(e)}")
        raise InternalError()
    return success_response(to_user_responses(users))
