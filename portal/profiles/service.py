"""
Profile Service - Business logic for provider and patient profile updates.
"""
import logging
from sqlalchemy.orm import Session, joinedload

from ..auth.models import User
from ..core.schemas import check_email_format
from ..exceptions import ConflictError, NotFoundError, ValidationError
from ..patients.models import Patient
from ..patients.schemas import PatientProfileUpdate
from .schemas import ProviderProfileUpdate

# Set up logging
logger = logging.getLogger(__name__)

# Patient fields written whenever they are present, even when empty
CLEARABLE_PATIENT_FIELDS = {"allergies", "medications"}

def update_provider_profile(db: Session, user: User, data: ProviderProfileUpdate) -> User:
    """
    Update the provider's own user fields and specialty.

    Args:
        db: Database session
        user: Authenticated provider
        data: Submitted profile fields

    Returns:
        User: Refreshed user with sub-profiles loaded

    Raises:
        ValidationError: If first name, last name or email is missing or the email is malformed
        ConflictError: If another user already owns the email
    """
    if not data.first_name or not data.last_name or not data.email:
        raise ValidationError("First name, last name, and email are required")

    try:
        email = check_email_format(data.email)
    except ValueError as e:
        raise ValidationError(str(e))

    # Checked before any field is touched so a conflict leaves the user unchanged
    existing_user = db.query(User).filter(User.email == email, User.id != user.id).first()
    if existing_user:
        logger.warning(f"Profile update refused for user {user.id}: email {email} already in use")
        raise ConflictError("Email is already in use")

    user.first_name = data.first_name
    user.last_name = data.last_name
    user.email = email
    user.phone = data.phone
    if user.provider is not None:
        user.provider.specialty = data.specialty or None

    db.commit()
    logger.info(f"Provider profile updated for user {user.id}")

    return (
        db.query(User)
        .options(joinedload(User.patient), joinedload(User.provider))
        .filter(User.id == user.id)
        .first()
    )

def get_patient_profile(db: Session, user: User) -> Patient:
    """
    Get the patient profile owned by the user.

    Raises:
        NotFoundError: If the user has no patient profile
    """
    patient = (
        db.query(Patient)
        .options(joinedload(Patient.user))
        .filter(Patient.user_id == user.id)
        .first()
    )
    if not patient:
        raise NotFoundError("Patient profile not found")
    return patient

def update_patient_profile(db: Session, user: User, data: PatientProfileUpdate) -> Patient:
    """
    Write the supplied patient fields.

    Empty values are skipped, except for allergies and medications which
    may be cleared with an empty string.

    Args:
        db: Database session
        user: Authenticated patient
        data: Submitted fields

    Returns:
        Patient: Updated profile
    """
    patient = get_patient_profile(db, user)

    for field, value in data.model_dump(exclude_unset=True).items():
        if field in CLEARABLE_PATIENT_FIELDS:
            if value is not None:
                setattr(patient, field, value)
        elif value:
            setattr(patient, field, value)

    db.commit()
    db.refresh(patient)
    logger.info(f"Patient profile updated for user {user.id}")
    return patient
