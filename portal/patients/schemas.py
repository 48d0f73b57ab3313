"""
Patient Schemas - Pydantic models for patient profile data.
"""
from datetime import date
from typing import Optional
from pydantic import Field

from ..core.schemas import CamelModel

class PatientProfileResponse(CamelModel):
    """
    Patient sub-profile as embedded in a user payload.
    """
    id: int
    user_id: int
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    insurance_type: Optional[str] = None
    insurance_provider: Optional[str] = None
    allergies: Optional[str] = None
    medications: Optional[str] = None
    medical_history: Optional[str] = None


class PatientContact(CamelModel):
    """Owning user's contact fields, shown alongside the patient profile."""
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None


class PatientProfileDetail(PatientProfileResponse):
    """
    Response for GET/PUT /patient/profile: the profile plus the owning user's contact fields.
    """
    user: PatientContact


class PatientProfileUpdate(CamelModel):
    """
    Patient profile update - every field is optional; only supplied values are written.
    """
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    allergies: Optional[str] = Field(None, description="Free text; an empty string clears it")
    medications: Optional[str] = Field(None, description="Free text; an empty string clears it")
