"""
Medical Record Service - access checks and loading for record reports.
"""
import logging
from sqlalchemy.orm import Session, joinedload

from ..auth.models import User, UserRole
from ..exceptions import AuthorizationError, NotFoundError
from ..patients.models import Patient
from ..providers.models import Provider
from .models import MedicalRecord

# Set up logging
logger = logging.getLogger(__name__)

def get_record_for_report(db: Session, user: User, record_id: int) -> MedicalRecord:
    """
    Load a medical record with everything its report shows, enforcing access rules.

    Patients may not generate reports. Providers may only generate reports for
    records attributed to them. Admins may generate any report.

    Args:
        db: Database session
        user: Authenticated user
        record_id: Medical record ID

    Returns:
        MedicalRecord: Record with patient, provider and appointment loaded

    Raises:
        AuthorizationError: If the user's role or attribution forbids access
        NotFoundError: If the record does not exist
    """
    if user.role == UserRole.PATIENT:
        raise AuthorizationError("Forbidden")

    record = (
        db.query(MedicalRecord)
        .options(
            joinedload(MedicalRecord.patient).joinedload(Patient.user),
            joinedload(MedicalRecord.provider).joinedload(Provider.user),
            joinedload(MedicalRecord.appointment),
        )
        .filter(MedicalRecord.id == record_id)
        .first()
    )
    if not record:
        raise NotFoundError("Medical record not found")

    if user.role == UserRole.PROVIDER:
        own_provider_id = user.provider.id if user.provider is not None else None
        if own_provider_id is None or record.provider_id != own_provider_id:
            logger.warning(f"Provider user {user.id} denied report for record {record_id}")
            raise AuthorizationError("Forbidden")

    return record
