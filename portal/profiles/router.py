"""
Profile Router - endpoints for the authenticated user's own profile.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from ..auth.dependencies import require_patient, require_roles
from ..auth.models import User, UserRole
from ..auth.schemas import to_user_response
from ..core.responses import success_response
from ..database import get_db
from ..exceptions import AppException, InternalError
from ..patients.schemas import PatientProfileDetail, PatientProfileUpdate
from .schemas import ProviderProfileUpdate
from .service import get_patient_profile, update_patient_profile, update_provider_profile

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()

require_provider = require_roles(UserRole.PROVIDER, detail="Only providers can update their profile")

@router.put("/profile", summary="Update Provider Profile")
async def update_my_provider_profile(
    profile_data: ProviderProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_provider)
):
    """
    Update the current provider's name, email, phone and specialty.

    The email must not belong to any other user.
    """
    try:
        user = update_provider_profile(db, current_user, profile_data)
    except AppException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating provider profile: {str(e)}")
        raise InternalError()
    return success_response(to_user_response(user), "Profile updated successfully")

@router.get("/patient/profile", summary="Get Patient Profile")
async def get_my_patient_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_patient)
):
    """
    Get the current patient's profile together with their contact details.
    """
    patient = get_patient_profile(db, current_user)
    return success_response(PatientProfileDetail.model_validate(patient))

@router.put("/patient/profile", summary="Update Patient Profile")
async def update_my_patient_profile(
    profile_data: PatientProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_patient)
):
    """
    Update the current patient's profile. Only supplied fields are changed.
    """
    try:
        patient = update_patient_profile(db, current_user, profile_data)
    except AppException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating patient profile: {str(e)}")
        raise InternalError()
    return success_response(PatientProfileDetail.model_validate(patient), "Profile updated successfully")
