"""
Import every model so SQLAlchemy can resolve string relationships and
``Base.metadata`` knows every table.
"""
from .auth.models import User, UserRole, UserSession
from .patients.models import Patient
from .providers.models import Provider
from .appointments.models import Appointment, AppointmentStatus
from .medical_records.models import MedicalRecord

__all__ = ["User", "UserRole", "UserSession", "Patient", "Provider",
           "Appointment", "AppointmentStatus", "MedicalRecord"]
