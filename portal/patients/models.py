"""
Patient Model - Stores patient-specific information.

This model extends the base User model with patient-specific fields and relationships.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Date, func
from sqlalchemy.orm import relationship
from ..database import Base

class Patient(Base):
    """
    Patient Model - Stores patient-specific information

    Fields:
    - id: Primary key for patient profile
    - user_id: Foreign key to User model
    - date_of_birth: Patient's date of birth
    - gender, address, city, state, zip_code: Demographics
    - emergency_contact / emergency_phone: Emergency contact information
    - insurance_type / insurance_provider: Coverage details
    - allergies, medications, medical_history: Clinical background notes
    """
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String, nullable=True)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    zip_code = Column(String, nullable=True)
    emergency_contact = Column(String, nullable=True)
    emergency_phone = Column(String, nullable=True)
    insurance_type = Column(String, nullable=True)
    insurance_provider = Column(String, nullable=True)
    allergies = Column(Text, nullable=True)
    medications = Column(Text, nullable=True)
    medical_history = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="patient")
    appointments = relationship("Appointment", back_populates="patient")
    medical_records = relationship("MedicalRecord", back_populates="patient", cascade="all, delete-orphan")

    def __repr__(self):
        """String representation of the Patient model"""
        return f"<Patient(id={self.id}, user_id={self.user_id})>"
