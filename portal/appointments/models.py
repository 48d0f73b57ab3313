"""
Appointment Model - Stores appointment information and scheduling.

This model manages the relationship between providers and patients for appointments.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
import enum
from ..database import Base

class AppointmentStatus(str, enum.Enum):
    """Enum for appointment status"""
    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"

class Appointment(Base):
    """
    Appointment Model - Stores appointment information

    Fields:
    - id: Primary key for appointment
    - provider_id: Foreign key to Provider model
    - patient_id: Foreign key to Patient model
    - title: Short description shown on calendars and reports
    - start_time / end_time: Scheduled slot
    - status: Current status of the appointment
    """
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    provider_id = Column(Integer, ForeignKey("providers.id", ondelete="CASCADE"), nullable=False)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False)
    title = Column(String, nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)
    status = Column(Enum(AppointmentStatus, native_enum=False, length=20), default=AppointmentStatus.SCHEDULED)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    provider = relationship("Provider", back_populates="appointments")
    patient = relationship("Patient", back_populates="appointments")

    def __repr__(self):
        """String representation of the Appointment model"""
        return f"<Appointment(id={self.id}, provider_id={self.provider_id}, patient_id={self.patient_id}, start='{self.start_time}')>"
